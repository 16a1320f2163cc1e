"""
Setup script for the scrimflow package with optional Cython compilation.

This builds the internal modules (_*/ packages) as compiled extensions,
while keeping the public API (runner.py, messenger.py, errors.py, cli.py)
as readable Python source.
"""

from setuptools import setup, find_packages, Extension
import os

# Check if Cython is available
try:
    from Cython.Build import cythonize
    USE_CYTHON = True
except ImportError:
    USE_CYTHON = False
    print("Cython not found. Building without compilation (source only).")

# Internal modules to compile with Cython
CYTHON_MODULES = [
    "src/scrimflow/_lobby/state_machine.py",
    "src/scrimflow/_lobby/store.py",
    "src/scrimflow/_lobby/engine.py",
    "src/scrimflow/_lobby/fanout.py",
    "src/scrimflow/_commands/router.py",
    "src/scrimflow/_commands/cooldowns.py",
    "src/scrimflow/_registry/repo_players.py",
    "src/scrimflow/_shared/email_client.py",
]


def get_extensions():
    """Build Extension objects for Cython compilation."""
    if not USE_CYTHON:
        return []

    extensions = []
    for module_path in CYTHON_MODULES:
        if os.path.exists(module_path):
            # Convert path to module name: src/scrimflow/_lobby/store.py -> scrimflow._lobby.store
            module_name = module_path.replace("src/", "").replace("/", ".").replace(".py", "")
            extensions.append(
                Extension(
                    name=module_name,
                    sources=[module_path],
                )
            )
    return extensions


def get_ext_modules():
    """Get extension modules, cythonized if Cython is available."""
    extensions = get_extensions()
    if not extensions:
        return []

    return cythonize(
        extensions,
        compiler_directives={
            "language_level": "3",
            "boundscheck": False,
            "wraparound": False,
        },
        nthreads=os.cpu_count() or 1,
    )


# Only add ext_modules if we have Cython
ext_modules = get_ext_modules() if USE_CYTHON else []

setup(
    name="scrimflow",
    version="1.0.0",
    description="ScrimFlow - Competitive scrim lobby bot over Gmail",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    ext_modules=ext_modules,
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "google-api-python-client>=2.100.0",
        "google-auth>=2.23.0",
        "google-auth-oauthlib>=1.1.0",
        "google-auth-httplib2>=0.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "cython>=3.0",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "scrimflow=scrimflow.cli:main",
        ],
    },
    package_data={
        "scrimflow": ["*.so", "*.pyd"],
        "scrimflow._registry": ["schema.sql"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Cython",
    ],
)
