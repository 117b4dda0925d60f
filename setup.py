from setuptools import setup
import os


def main():
    this_directory = os.path.abspath(os.path.dirname(__file__))
    with open(os.path.join(this_directory, 'README.rst'), 'r') as f:
        long_description = f.read()

    setup(name='bngexport',
          version='1.0.0',
          description='Export of reaction network models to BNGL for '
                      'BioNetGen and NFsim',
          long_description=long_description,
          long_description_content_type='text/x-rst',
          packages=['bngexport', 'bngexport.generator', 'bngexport.export',
                    'bngexport.examples', 'bngexport.testing',
                    'bngexport.tests'],
          python_requires='>=3.6',
          install_requires=['numpy', 'scipy>=1.1', 'sympy>=1.6', 'networkx'],
          extras_require={'test': ['pytest']},
          keywords=['systems', 'biology', 'model', 'rules', 'bngl'],
          classifiers=[
            'Development Status :: 4 - Beta',
            'Environment :: Console',
            'Intended Audience :: Science/Research',
            'License :: OSI Approved :: BSD License',
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3',
            'Topic :: Scientific/Engineering :: Bio-Informatics',
            'Topic :: Scientific/Engineering :: Chemistry',
            ],
          )


if __name__ == '__main__':
    main()
