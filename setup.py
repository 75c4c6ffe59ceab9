#!/usr/bin/env python
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import setuptools

project = 'regpolicy'

setuptools.setup(
    name=project,
    version='1.0.0',
    description='Container registry mirror and signature policy compiler',
    classifiers=[
        'Environment :: Console',
        'Intended Audience :: Information Technology',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        ],
    packages=setuptools.find_packages(),
    include_package_data=True,
    python_requires='>=3.11',
    install_requires=[
        'jsonschema>=4.0.0',
        'oslo.config>=9.0.0',
        'oslo.i18n>=5.1.0',
        'oslo.log>=5.0.0',
        'oslo.serialization>=5.0.0',
        'oslo.utils>=6.0.0',
        'pbr>=5.8.0',
        'PyYAML>=6.0',
        'tomli-w>=1.0.0',
        ],
    extras_require={
        'test': [
            'fixtures>=4.0.0',
            'oslotest>=4.5.0',
            'stestr>=3.0.0',
            'testtools>=2.5.0',
            'pytest',
            ],
        },
    entry_points={
        'console_scripts': [
            'regpolicy-compile = regpolicy.cmd.compile:main',
            ],
        'oslo.config.opts': [
            'regpolicy = regpolicy.conf.opts:list_opts',
            ],
        },
)
