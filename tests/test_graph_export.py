"""
Tests for debug graph export.
"""

import json

from stitchgen.export import export_level_dot, export_level_json, level_to_dict


def test_level_to_dict(generator):
    """Chunks, contexts and partners are exported as plain data"""
    level = generator.generate().level
    data = level_to_dict(level)
    assert data['dimensions'] == 2
    assert data['bounds'] is None
    assert len(data['chunks']) == 5
    root = data['chunks'][0]
    assert all(not c['open'] for c in root['contexts'])
    assert {tuple(c['target']) for c in root['contexts']} == {(1, 2), (2, 3), (3, 0), (4, 1)}


def test_export_level_json(generator):
    """JSON export carries seed and statistics"""
    level = generator.generate().level
    data = json.loads(export_level_json(level, seed=42))
    assert data['metadata']['seed'] == 42
    assert data['metadata']['generator'] == 'stitchgen'
    assert data['statistics']['chunk_count'] == 5
    assert data['statistics']['connection_count'] == 4
    assert data['statistics']['open_context_count'] == 12
    assert data['level']['chunks'][0]['extent'] == [10.0, 10.0]


def test_export_level_dot(generator):
    """DOT export has one node per chunk and one edge per aligned pair"""
    level = generator.generate().level
    dot = export_level_dot(level)
    assert dot.startswith('graph Level {')
    assert dot.rstrip().endswith('}')
    assert dot.count('[label=') == 5
    assert dot.count(' -- ') == 4
    assert '#90EE90' in dot
