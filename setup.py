#!/usr/bin/env python
from setuptools import setup, find_packages

pkg_root = 'src/python'

setup(name='bmodel',
      version='0.1.0',
      description='Models with staged, transactional properties, committed to pluggable storage backends.',
      author='Sebastian Thiel',
      author_email='byronimo@gmail.com',
      url='https://github.com/Byron/bcore',
      packages=find_packages(pkg_root),
      package_dir={'' : pkg_root},
      python_requires='>=3.6',
      install_requires=['PyYAML>=5.1'],
      extras_require={'test': ['pytest']}
     )
