from setuptools import setup

setup(
    name='corrmaster',
    version='1.0',
    description="Memory-efficient FFT vector counts for two-point statistics of 2D and 3D fields",
    long_description="Auto- and cross-correlation vector counts up to a cutoff lag, computed either with one FFT of the whole field or window by window from memory-mapped or HDF5 arrays with masked overlapping blocks",
    license='Unlicense',
    packages=['corrmaster'],
    install_requires='h5py,nextprod,numpy,scipy,tqdm'.split(','),
    extras_require={'test': ['pytest']},
    zip_safe=True,
    keywords='two-point statistics correlation vector counts fft out-of-core memmap hdf5 microstructure',
)
