import setuptools

setuptools.setup(
    name="viterbi_hmm",
    version="0.1.0",
    license="MIT",
    packages=setuptools.find_packages(exclude=["tests"]),
    description="Viterbi decoding of the hidden states of two-state hidden Markov models",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=["scipy", "numpy", "terminaltables", "tqdm"],
    entry_points={"console_scripts": ["viterbi-hmm=viterbi_hmm.cli:main"]},
    test_suite="py.test",
    tests_require=["pytest", "pytest-cov"],
    extras_require={"test": ["pytest", "pytest-cov"]},
)
