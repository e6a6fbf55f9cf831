from setuptools import find_packages, setup

setup(
    name="dirsize-cache",
    version="0.1.0",
    description="Directory size reporting with a modification-time keyed cache",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "cachetools>=5.0.0",
    ],
    entry_points={
        "console_scripts": [
            "dirsize-cache=dirsize_cache.__main__:main",
        ],
    },
    python_requires=">=3.10",
    extras_require={
        "dev": [
            "pytest",
        ],
    },
)
