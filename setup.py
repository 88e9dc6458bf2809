from setuptools import setup, find_packages

setup(
    name="svgtidy",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"svgtidy": ["config/*.yaml"]},
    python_requires=">=3.9",
    install_requires=[
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest", "lxml"],
    },
    entry_points={
        "console_scripts": [
            "svgtidy=svgtidy.main:main",
        ],
    },
)
