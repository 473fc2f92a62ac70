# Install as `pip install -e .[test]`; set SYMQUAD_CYTHONIZE=1 to compile the
# modules with Cython, as `python3 setup.py build_ext --inplace`.
import os
from glob import glob

from setuptools import find_packages, setup

ext_modules = []
if os.environ.get('SYMQUAD_CYTHONIZE'):
    from Cython.Build import cythonize
    os.environ['CFLAGS'] = '-O3'
    ext_modules = cythonize(
        [
            fn for fn in glob('symquad/*/*py')
            if '_test.py' not in fn and '__init__' not in fn
        ],
        compiler_directives={'language_level': "3"},
    )

setup(
    name='symquad',
    version='0.1.0',
    description='Primitives for constructing fully symmetric quadrature rules',
    packages=find_packages(include=['symquad', 'symquad.*']),
    python_requires='>=3.8',
    install_requires=['numpy', 'scipy', 'matplotlib'],
    extras_require={
        'test': ['pytest'],
        'cython': ['Cython'],
    },
    ext_modules=ext_modules,
)
