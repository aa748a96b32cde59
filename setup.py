#!/usr/bin/env python
"""
faultline
=========

faultline is a Python client for the `faultline <https://github.com/faultline/faultline>`_
error tracking API. It normalizes exceptions into notices, lets applications
filter them, and delivers them through pluggable reporters, holding them back
while the network is unavailable.
"""
from setuptools import setup, find_packages
import re
import ast


_version_re = re.compile(r'VERSION\s+=\s+(.*)')

with open('faultline/__init__.py', 'rb') as f:
    version = str(ast.literal_eval(_version_re.search(
        f.read().decode('utf-8')).group(1)))


install_requires = [
    'requests>=2.20',
]

tests_require = [
    'flake8',
    'mock',
    'pytest>=6.0',
    'pytest-timeout',
    'responses',
]


setup(
    name='faultline',
    version=version,
    author='faultline',
    url='https://github.com/faultline/faultline-python',
    description='faultline is a client for the faultline error tracking API',
    long_description=__doc__,
    packages=find_packages(exclude=("tests", "tests.*",)),
    zip_safe=False,
    python_requires='>=3.7',
    extras_require={
        'tests': tests_require,
    },
    license='BSD',
    install_requires=install_requires,
    include_package_data=True,
    classifiers=[
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python',
        'Topic :: Software Development',
    ],
)
