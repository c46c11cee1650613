# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#project-information

import os
import sys
import sphinx_rtd_dark_mode

# Add the project root to sys.path so Sphinx can import all modules
sys.path.insert(0, os.path.abspath("../.."))  # assuming conf.py is in docs/source

project = 'Braking Distance Simulator'
copyright = '2026, Brakesim Team'
author = 'Brakesim Team'
release = '0.1'

# -- General configuration ---------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#general-configuration

extensions = [
    "sphinx.ext.autodoc",    # generate docs from docstrings
    "sphinx.ext.napoleon",   # parse Google/NumPy style docstrings
    "sphinx.ext.viewcode",   # add links to source code
    "sphinx_rtd_dark_mode"
]

templates_path = ['_templates']
exclude_patterns = []

# -- Options for HTML output -------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#options-for-html-output

html_theme = "sphinx_rtd_theme"
default_dark_mode = True
html_static_path = []

# -- Mock imports to avoid ModuleNotFoundError during docs build --
# The view needs a display; the docs only need its docstrings.
autodoc_mock_imports = ["pygame"]
