# -*- coding: utf-8 -*-

import io
import os
import re

from setuptools import find_packages, setup

# version
here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'glifpy', '__init__.py'), 'r') as f:
    init_py = f.read()
version = re.search('__version__ = "(.*)"', init_py).groups()[0]

# obtain long description from README
with io.open(os.path.join(here, 'README.md'), 'r', encoding='utf-8') as f:
    README = f.read()

# installation packages
packages = find_packages(include=['glifpy', 'glifpy.*'])

# setup
setup(
    name='glifpy',
    version=version,
    description='glifpy: Generalized Leaky Integrate-and-Fire neurons in Python',
    long_description=README,
    long_description_content_type="text/markdown",
    author='BrainPy Team',
    author_email='chao.brain@qq.com',
    packages=packages,
    python_requires='>=3.10',
    install_requires=['numpy>=1.15', 'jax', 'tqdm'],
    extras_require={
        'cpu': ['jax[cpu]'],
        'test': ['pytest', 'absl-py'],
    },
    keywords=('computational neuroscience, '
              'spiking neuron models, '
              'generalized leaky integrate-and-fire, '
              'brain dynamics modeling'),
    classifiers=[
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: Apache Software License',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Software Development :: Libraries',
    ],
    license='Apache-2.0 license',
)
