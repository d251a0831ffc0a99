# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dirinventory",
    version="0.1.0",
    description="Walk a directory tree and export per-directory metadata to CSV and JSON",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dirinventory", "dirinventory.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'dirinventory=dirinventory.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
