import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="icnspack",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Convert .iconset directories to .icns files and back without touching the PNGs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests"]),
    scripts=[
        'scripts/icnsconvert.py',
        'scripts/icnsdisplay.py',
    ],
    install_requires=[],
    extras_require={
        'display': [
            'pillow',
        ],
        'test': [
            'pytest',
            'pillow',
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPLv2 License",
        "Operating System :: OS Independent",
    ],
)
