# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import setuptools

import hls_parser

with open('README.md', 'r') as f:
  long_description = f.read()

setuptools.setup(
  name='hls-parser',
  version=hls_parser.__version__,
  description='A parser from HLS playlist text to plain dictionaries.',
  long_description=long_description,
  long_description_content_type='text/markdown',
  packages=setuptools.find_packages(exclude=['tests']),
  install_requires=[
      'PyYAML',
  ],
  extras_require={
      'test': [
          'pytest',
          'pytest-mock',
      ],
  },
  classifiers=[
      'Programming Language :: Python :: 3',
      'License :: OSI Approved :: Apache Software License',
      'Operating System :: OS Independent',
  ],
  python_requires='>=3.8',
)
