import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="fitstruct",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Locate the headers and data units of FITS files without loading them",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/gipi/fitstruct",
    packages=setuptools.find_packages(exclude=('tests',)),
    python_requires='>=3.8',
    install_requires=[],
    extras_require={
        'test': [
            'pytest',
            'numpy',
            'astropy',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v2 (GPLv2)",
        "Operating System :: OS Independent",
    ],
)
