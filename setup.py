"""
metaheur setup script.
Installs the framework package; dependencies are listed in requirements.txt.
"""

import os

from setuptools import find_packages, setup

HERE = os.path.abspath(os.path.dirname(__file__))


def read_requirements(filename: str = 'requirements.txt'):
    """Read dependency specifiers, skipping comments and blank lines."""
    path = os.path.join(HERE, filename)
    with open(path, encoding='utf-8') as f:
        return [line.strip() for line in f
                if line.strip() and not line.strip().startswith('#')]


setup(
    name='metaheur',
    version='1.0.0',
    description='Modular single-trajectory metaheuristics: VNS, SA, Tabu Search and LNS',
    python_requires='>=3.8',
    packages=find_packages(include=['metaheur', 'metaheur.*']),
    py_modules=['main'],
    install_requires=read_requirements(),
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': ['metaheur=main:main'],
    },
)
