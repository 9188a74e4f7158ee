# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="duplicacy2ncdu",
    version="0.1.0",
    description="Convert Duplicacy enumeration logs into NCDU JSON exports",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["duplicacy2ncdu*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'duplicacy2ncdu=duplicacy2ncdu.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX",
        "Environment :: Console",
    ],
)
