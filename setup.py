"""Packaging for volcash.

See https://setuptools.pypa.io/en/latest/references/keywords.html for details.
"""

import setuptools

setuptools.setup(
    name="volcash",
    version="0.1.0",
    description="Volcanic ash injection into atmospheric column grids",
    license="Apache-2.0",
    python_requires=">=3.10",
    packages=setuptools.find_packages(include=["volcash", "volcash.*"]),
    install_requires=[
        "dask[array]>=2022.3",
        "numpy>=1.22",
        "pandas>=1.4",
        "xarray>=2022.3",
    ],
    extras_require={
        "test": [
            "pyproj>=3.5",
            "pytest>=7.0",
        ],
    },
)
