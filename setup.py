from setuptools import setup, find_packages

setup(
    name="body_lines",
    version="0.1.0",
    description="A 2D articulated stick-figure simulation with walker and snowball scenarios",
    author="body_lines contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "body_lines": ["scenarios/*.json"],
    },
    install_requires=[
        "pygame>=2.6.1",
        "numpy>=2.2.2"
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "body_lines=body_lines.main:main",
        ],
    },
)
