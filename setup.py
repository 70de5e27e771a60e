"""
setup.py for the glpkit Python package

The native solver is GLPK, shipped as a prebuilt extension by the swiglpk
distribution, so nothing is compiled here.
"""
from pathlib import Path
from setuptools import setup


# Read README for long description
readme_path = Path(__file__).parent / 'README.md'
long_description = readme_path.read_text(encoding='utf-8') if readme_path.exists() else ''

setup(
    name='glpkit',
    version='0.1.0',
    author='glpkit Contributors',
    description='LP/MIP modeling and solving on top of the GNU Linear Programming Kit',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=['glpkit'],
    package_dir={'glpkit': 'glpkit'},
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.7.0',
        'swiglpk>=5.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    python_requires='>=3.8',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Scientific/Engineering :: Mathematics',
    ],
    zip_safe=False,
)
