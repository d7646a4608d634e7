"""
Debug export of generated levels.
"""

from .graph_export import export_level_dot, export_level_json, level_to_dict

__all__ = ['export_level_dot', 'export_level_json', 'level_to_dict']
