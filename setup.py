import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="elfstruct",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="ELF files for humans",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/gipi/abstruct",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    scripts=["scripts/readelf.py"],
    install_requires=[
        'bitstring',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    python_requires='>=3.8',
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPLv2 License",
        "Operating System :: OS Independent",
    ],
)
