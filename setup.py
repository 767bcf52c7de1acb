import setuptools

setuptools.setup(
    name="exodusdb",
    version="1.0.0",
    description="Exodus II finite element database model stored directly in NetCDF",
    packages=["exodusdb"],
    package_dir={"exodusdb": "exodusdb"},
    python_requires=">=3.8",
    install_requires=["numpy", "netCDF4"],
    extras_require={"test": ["pytest"]},
)
