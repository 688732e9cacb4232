import io
import os
import setuptools

here = os.path.realpath(os.path.dirname(__file__))

name = 'pvariation'

version = '0.0.1'

author = 'Cristopher Salvi'

author_email = 'crispitagorico@gmail.com'

description = "Exact p-variation of real-valued sequences in near-linear time, with numba and batch support."

with io.open(os.path.join(here, 'README.md'), 'r', encoding='utf-8') as f:
    readme = f.read()

license = "Apache-2.0"

classifiers = ["Intended Audience :: Developers",
               "Intended Audience :: Financial and Insurance Industry",
               "Intended Audience :: Information Technology",
               "Intended Audience :: Science/Research",
               "License :: OSI Approved :: Apache Software License",
               "Natural Language :: English",
               "Operating System :: MacOS :: MacOS X",
               "Operating System :: Microsoft :: Windows",
               "Operating System :: Unix",
               "Programming Language :: Python :: 3",
               "Programming Language :: Python :: Implementation :: CPython",
               "Topic :: Scientific/Engineering :: Information Analysis",
               "Topic :: Scientific/Engineering :: Mathematics"]

python_requires = ">=3.8"

install_requires = ["numpy", "numba >= 0.50", "torch >= 1.6.0", "scikit-learn", "joblib", "tqdm"]

extras_require = {"test": ["pytest"]}

setuptools.setup(name=name,
                 version=version,
                 author=author,
                 author_email=author_email,
                 maintainer=author,
                 maintainer_email=author_email,
                 description=description,
                 long_description=readme,
                 long_description_content_type="text/markdown",
                 license=license,
                 classifiers=classifiers,
                 zip_safe=False,
                 python_requires=python_requires,
                 install_requires=install_requires,
                 extras_require=extras_require,
                 packages=[name])
