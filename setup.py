"""

Install the nameparser package.

"""

from setuptools import setup

setup(
    name="nameparser",
    version="0.0",
    description="A parser for scientific names of organisms.",
    keywords="taxonomy nomenclature scientific names parser",
    packages=["nameparser"],
    package_data={"nameparser": ["parserdata/*.txt", "testdata/*.txt"]},
    install_requires=["regex", "unidecode"],
    extras_require={"test": ["pytest", "mypy", "flake8"]},
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.11",
    ],
)
