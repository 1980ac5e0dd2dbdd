from setuptools import setup, find_packages

setup(
    name='request_validator',
    version='0.1.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    include_package_data=True,
    description='Declarative validation of request parameters with first-failure error reporting.',
    install_requires=[
        'fastapi>=0.110',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'anyio>=3.7',
            'httpx>=0.24',
            'pytest>=7',
            'pytest-mock>=3.10',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',
    zip_safe=False,
)
