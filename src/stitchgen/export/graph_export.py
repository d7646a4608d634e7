"""
Graph export utilities for level debugging.

Provides export functions to inspect generated levels in:
- DOT format (Graphviz): chunks as nodes, aligned context pairs as edges
- JSON format for programmatic analysis and reproducibility tracking
"""

from typing import Any, Dict
import json

from ..layout import Level

_VERSION = '1.0'


def _node_ids(level: Level) -> Dict[str, int]:
    return {chunk.id: i for i, chunk in enumerate(level.chunks)}


def level_to_dict(level: Level) -> Dict[str, Any]:
    """Plain-data view of a level's chunks, contexts and anchors.

    Contexts reference their partner as [chunk index, context index].
    """
    ids = _node_ids(level)
    chunks = []
    for chunk in level.chunks:
        contexts = []
        for context in chunk.contexts:
            target = None
            if context.target is not None and context.target.chunk.id in ids:
                target = [ids[context.target.chunk.id], context.target.index]
            contexts.append({
                'index': context.index,
                'position': list(context.position),
                'direction': context.direction.value,
                'tag': context.tag,
                'open': context.is_open,
                'blocked': context.blocked,
                'target': target,
            })
        chunks.append({
            'id': chunk.id,
            'template': chunk.template.index,
            'name': chunk.template.display_name,
            'tag': chunk.tag,
            'rotation': chunk.rotation,
            'position': list(chunk.position),
            'extent': list(chunk.extent),
            'contexts': contexts,
            'anchors': [
                {'position': list(anchor.position), 'tag': anchor.tag}
                for anchor in chunk.anchors
            ],
        })
    return {
        'dimensions': level.dimensions,
        'bounds': list(level.bounds.extent) if level.bounds is not None else None,
        'chunks': chunks,
    }


def export_level_dot(level: Level) -> str:
    """Export a level as Graphviz DOT.

    Returns:
        DOT format string for visualization with Graphviz or online viewers
    """
    ids = _node_ids(level)
    root = level.root
    lines = ['graph Level {']
    lines.append('  node [shape=box, style=filled];')
    lines.append('')

    for chunk in level.chunks:
        node = ids[chunk.id]
        open_count = sum(1 for _ in chunk.open_contexts())
        label_lines = [
            chunk.template.display_name,
            f"id: {node}",
            f"pos: {chunk}",
        ]
        if chunk.rotation:
            label_lines.append(f"rot: {chunk.rotation * 90}")
        if open_count:
            label_lines.append(f"open: {open_count}")
        label = '\\n'.join(label_lines)

        if chunk is root:
            color = '#90EE90'   # Light green
        elif open_count:
            color = '#FFB6C1'   # Light pink
        else:
            color = '#D3D3D3'   # Light gray
        lines.append(f'  chunk_{node} [label="{label}" fillcolor="{color}"];')

    lines.append('')

    for first, second in level.aligned_pairs():
        if first.chunk.id not in ids or second.chunk.id not in ids:
            continue
        label = first.tag or second.tag
        attrs = f' [label="{label}"]' if label else ''
        lines.append(f'  chunk_{ids[first.chunk.id]} -- chunk_{ids[second.chunk.id]}{attrs};')

    lines.append('}')
    return '\n'.join(lines)


def export_level_json(level: Level, seed: int) -> str:
    """Export a level as JSON with metadata.

    Args:
        level: Level to export
        seed: The seed used for generation

    Returns:
        JSON string with the level and debug metadata
    """
    chunk_tags: Dict[str, int] = {}
    for chunk in level.chunks:
        chunk_tags[chunk.tag] = chunk_tags.get(chunk.tag, 0) + 1

    output = {
        'metadata': {
            'seed': seed,
            'version': _VERSION,
            'generator': 'stitchgen',
        },
        'statistics': {
            'chunk_count': len(level),
            'connection_count': len(level.aligned_pairs()),
            'open_context_count': len(level.find_open_contexts()),
            'open_chunk_count': len(level.find_open_chunks()),
            'size': level.size,
            'chunk_tags': chunk_tags,
        },
        'level': level_to_dict(level),
    }
    return json.dumps(output, indent=2)
