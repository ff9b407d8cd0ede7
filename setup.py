from setuptools import setup, find_packages

setup(
    name="ehstat",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "ehstat": ["utils/templates/*.j2"],
    },
    entry_points={
        'console_scripts': [
            'ehstat=ehstat.cli:main',
            'ehstat-compare=ehstat.cli:compare_main',
            'ehstat-eh-size=ehstat.cli:eh_size_main',
            'ehstat-scan=ehstat.cli:scan_main',
            'ehstat-sections=ehstat.cli:sections_main',
        ],
    },
    install_requires=[
        "Jinja2>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
    author="ehstat",
    description="ELF section, symbol and unwinding metadata size reports built on readelf, nm and bloaty",
)
