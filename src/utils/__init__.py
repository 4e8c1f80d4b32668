"""
Utility modules for the Legal Scrutiny Report generator.
"""

from . import run_merger
from . import placeholder_scanner
from . import field_registry
from . import region_renderers
from . import doc_filler
from . import report_preview
from . import template_utils
