# -*- coding: utf-8 -*-

# Copyright (c) 2016-2021 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

from setuptools import setup, find_packages

classifiers = [
    'Development Status :: 4 - Beta',
    'Environment :: Console',
    'Intended Audience :: Developers',
    'Intended Audience :: Education',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: BSD License',
    'Natural Language :: English',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3']

setup(
    name='optmodel',
    version='1.0.0',
    description='Named and indexed blocks of linear constraints and quadratic costs for power '
                'system optimization problems, assembled into sparse aggregate parameters.',
    license='BSD',
    python_requires='>=3.8',
    install_requires=["numpy",
                      "scipy",
                      "pandas"],
    extras_require={
        "test": ["pytest", "pytest-xdist"]},
    packages=find_packages(include=['optmodel', 'optmodel.*']),
    include_package_data=True,
    classifiers=classifiers
)
