from setuptools import find_packages, setup
from glob import glob

classes = """
    Development Status :: 3 - Alpha
    License :: OSI Approved :: BSD License
    Topic :: Software Development :: Libraries
    Topic :: Scientific/Engineering
    Topic :: Scientific/Engineering :: Bio-Informatics
    Programming Language :: Python :: 3
    Programming Language :: Python :: 3 :: Only
    Operating System :: Unix
    Operating System :: POSIX
    Operating System :: MacOS :: MacOS X
"""
classifiers = [s.strip() for s in classes.split('\n') if s]

description = ('Codon-aware pairwise and profile alignment of coding DNA.')


setup(name='codalign',
      version='0.1.0',
      license='BSD-3-Clause',
      description=description,
      packages=find_packages(include=['codalign', 'codalign.*']),
      install_requires=[
          'numpy',
          'scipy',
          'pandas',
          'numba',
          'matplotlib',
          'biopython',
      ],
      extras_require={'test': ['pytest']},
      scripts=glob('scripts/*'),
      classifiers=classifiers,
      package_data={})
