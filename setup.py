from setuptools import setup, find_packages

setup(
    name="circlearea",
    version="0.1.0",
    description="Exact areas of circle intersections for area-proportional Venn and Euler diagrams",
    author="Isaac Campbell",
    author_email="isaac.campbell@wolfson.ox.ac.uk",
    packages=find_packages(exclude=["test", "test.*"]),
    install_requires=[
        "jax>=0.6.2",
        "jax-dataclasses>=1.6.2",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    python_requires=">=3.11",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPL-3.0 License",
    ],
)
