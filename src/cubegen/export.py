"""Mesh export of cube structures via trimesh."""
import logging
from pathlib import Path
from typing import Union

import numpy as np
import trimesh

from cubegen.geometry import Structure

logger = logging.getLogger(__name__)


def structure_to_mesh(structure: Structure, cube_size: float = 1.0) -> trimesh.Trimesh:
    """One axis-aligned box per cube, cube (x, y, z) spanning [x, x+1) etc.

    Raises:
        ValueError: if the structure is empty.
    """
    if structure.is_empty():
        raise ValueError("Cannot build a mesh from an empty structure")

    boxes = []
    for x, y, z in structure.positions():
        box = trimesh.creation.box(extents=[cube_size] * 3)
        box.apply_translation((np.array([x, y, z], dtype=float) + 0.5) * cube_size)
        boxes.append(box)
    return trimesh.util.concatenate(boxes)


def export_structure(
    structure: Structure,
    path: Union[str, Path],
    cube_size: float = 1.0,
) -> Path:
    """Write ``structure`` as a mesh; format follows the file extension."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    mesh = structure_to_mesh(structure, cube_size)
    mesh.export(str(out_path))
    logger.info(
        "Exported structure: cubes=%d faces=%d path=%s",
        len(structure), len(mesh.faces), out_path,
    )
    return out_path
