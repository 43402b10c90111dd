"""Snapshots of generated galaxy buffers."""

import json
import numpy as np
from typing import Any, Dict, Optional, Tuple
from pathlib import Path

from galaxy_gen.generator import GalaxyBuffers


def save_buffers(
    buffers: GalaxyBuffers,
    output_path: str,
    metadata: Optional[Dict[str, Any]] = None
):
    """Save galaxy buffers to file.
    
    Args:
        buffers: Generated positions and colors
        output_path: Output file path (.npz or .json)
        metadata: Optional metadata dictionary (e.g. the parameters used)
    """
    output_path = Path(output_path)
    
    if output_path.suffix == '.npz':
        save_dict = {
            'positions': buffers.positions,
            'colors': buffers.colors,
        }
        if metadata:
            for key, value in metadata.items():
                if isinstance(value, (int, float, str)):
                    save_dict[f'metadata_{key}'] = value
        np.savez_compressed(output_path, **save_dict)
    
    elif output_path.suffix == '.json':
        data = {
            'positions': buffers.positions.tolist(),
            'colors': buffers.colors.tolist(),
            'metadata': metadata or {}
        }
        with open(output_path, 'w') as f:
            json.dump(data, f)
    
    else:
        raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .npz or .json")


def load_buffers(input_path: str) -> Tuple[GalaxyBuffers, Dict[str, Any]]:
    """Load galaxy buffers from file.
    
    Args:
        input_path: Input file path
        
    Returns:
        Tuple of (buffers, metadata)
    """
    input_path = Path(input_path)
    
    if input_path.suffix == '.npz':
        with np.load(input_path) as data:
            positions = data['positions']
            colors = data['colors']
            metadata = {}
            for key in data.files:
                if key.startswith('metadata_'):
                    metadata[key[9:]] = data[key].item()
    
    elif input_path.suffix == '.json':
        with open(input_path, 'r') as f:
            data = json.load(f)
        positions = np.array(data['positions'], dtype=np.float32).reshape(-1, 3)
        colors = np.array(data['colors'], dtype=np.float32).reshape(-1, 3)
        metadata = data.get('metadata', {})
    
    else:
        raise ValueError(f"Unsupported file format: {input_path.suffix}. Use .npz or .json")
    
    return GalaxyBuffers(positions=positions, colors=colors), metadata
