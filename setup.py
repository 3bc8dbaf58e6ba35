from setuptools import setup, find_packages

# Core dependencies
core_requirements = [
    "defusedxml>=0.7.1",
    "lxml>=5.0.0",
]

# Optional test dependencies
test_requirements = [
    "pytest>=7.0.0",
]

setup(
    name="svg_ninja",
    version="1.1.0",
    description="Secure SVG and SVGZ uploads with metadata cleaning and viewBox correction",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=core_requirements,
    extras_require={
        "test": test_requirements,
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "svg-ninja=svg_ninja.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Security",
        "Topic :: Multimedia :: Graphics",
    ],
)
