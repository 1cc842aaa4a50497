import crestron_touchpanel
import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath('..'))

project = 'crestron-touchpanel'
copyright = f'{datetime.now().year}, crestron-touchpanel contributors'
author = 'crestron-touchpanel contributors'

release = crestron_touchpanel.__version__

# -- General configuration ---------------------------------------------------
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.autosummary',
    'sphinx.ext.viewcode',
    'sphinx.ext.napoleon',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

autosummary_generate = True
autodoc_member_order = 'bysource'
autoclass_content = 'both'
autodoc_typehints = 'description'
autodoc_typehints_format = 'short'

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store', '_autosummary']


def skip_private_members(app, what, name, obj, skip, options):
    # _extra_fields holds unmapped JSON keys and is not part of the model API
    if name == '_extra_fields':
        return True
    return skip


def setup(app):
    app.connect('autodoc-skip-member', skip_private_members)


templates_path = ['_templates']
html_theme = 'sphinx_rtd_theme'
html_title = f"{project} Documentation"

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'requests': ('https://requests.readthedocs.io/en/latest/', None),
    'urllib3': ('https://urllib3.readthedocs.io/en/stable/', None),
}

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_include_private_with_doc = False
napoleon_use_admonition_for_examples = True
napoleon_use_admonition_for_notes = True
napoleon_use_ivar = True
napoleon_use_param = True
napoleon_use_rtype = True
