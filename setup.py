from setuptools import setup, find_packages

setup(
    name="label_overlap",
    version="0.1.0",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "numpy",
        "nibabel"
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'label-overlap=label_overlap.main:cli',
        ],
    },
)
