import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()
setuptools.setup(
    name="nfsmark",
    version="0.1.0",
    description="A python package to measure create, stat and delete rates against networked filesystem shares, aggregated across cooperating processes.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_namespace_packages(where='src'),
    package_dir={"": "src"},
    entry_points={'console_scripts': ['nfsmark = nfsmark.nfsmark:main']},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "numpy",
        "tabulate",
    ],
    extras_require={
        "mpi": ["mpi4py"],
        "nfs": ["libnfs"],
        "test": ["pytest>=7"],
    },
    python_requires=">=3.8",
)
