"""
Discovery of stylesheet entry points in theme templates.
"""

from stencil_styles.discovery.templates import StylesheetTemplateScanner

__all__ = ["StylesheetTemplateScanner"]
