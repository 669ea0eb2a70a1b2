from setuptools import setup, find_namespace_packages

with open("requirements.txt") as f:
    install_reqs = f.read().strip().split("\n")

setup(
    name='cmdapdu',
    version='0.1.0',
    license='MIT license',
    description = 'ISO/IEC 7816-4 Command APDU parser and validator',
    long_description="Parse, validate and encode smart card Command APDUs "
                     "with standard and extended length fields",
    packages=find_namespace_packages("src", include=["*"]),
    package_dir={"": "src"},
    install_requires=install_reqs,
    extras_require={
        "card": ["pyscard"],
        "test": ["pytest", "pytest-mock", "pyscard"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
