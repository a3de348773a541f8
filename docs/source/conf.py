# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html
import os
import sys
sys.path.insert(0, os.path.abspath('../../')) # корінь проекту, де лежить пакет tunebox
# -- Project information -----------------------------------------------------

project = 'TuneBox'
copyright = '2025, TuneBox'
author = 'TuneBox'
release = '1.0'

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.viewcode',
]

templates_path = ['_templates']
exclude_patterns = []

language = 'uk'

# -- Options for HTML output -------------------------------------------------

html_theme = 'alabaster'
html_static_path = []
