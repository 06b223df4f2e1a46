from setuptools import setup, find_packages

setup(name='strictcsv',
      version='0.1.0',
      description='Strict streaming CSV reader and writer for Python',
      packages=find_packages(include=['strictcsv', 'strictcsv.*']),
      python_requires='>=3.8',
      install_requires=[],
      extras_require={
          'test': ['pytest'],
          'bench': ['pandas', 'polars'],
      },
      entry_points={
          'console_scripts': ['strictcsv=strictcsv.cli:main'],
      },
      zip_safe=False)
