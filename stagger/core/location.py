"""Staggered locations and the 1-based periodic index helpers.

Indexing model (Arakawa C-grid, 1-based along every axis):
    Cell index i     -> centre of the i-th cell
    Face index i     -> face between cells i-1 and i along that axis

Along z, k = 1 is the top layer and k increases downward, so the face
k = 1 is the surface and the bottom face (k = Nz + 1) is not stored.
"""

from enum import Enum, IntEnum


class Axis(IntEnum):
    """Grid axes, usable directly as array dimensions."""

    X = 0
    Y = 1
    Z = 2


class Location(Enum):
    """Where a field's values sit on the staggered grid."""

    CELL = "cell"
    FACE_X = "face_x"
    FACE_Y = "face_y"
    FACE_Z = "face_z"

    @property
    def is_face(self) -> bool:
        return self is not Location.CELL

    @property
    def axis(self) -> Axis | None:
        """Axis normal to the face, or None for cell centres."""
        return _FACE_AXIS.get(self)

    @classmethod
    def face(cls, axis: Axis) -> "Location":
        """Face location normal to ``axis``."""
        return _AXIS_FACE[Axis(axis)]


_AXIS_FACE = {
    Axis.X: Location.FACE_X,
    Axis.Y: Location.FACE_Y,
    Axis.Z: Location.FACE_Z,
}
_FACE_AXIS = {face: axis for axis, face in _AXIS_FACE.items()}


def next_index(i: int, n: int) -> int:
    """Periodic successor on [1, n]: n + 1 wraps to 1."""
    return 1 if i == n else i + 1


def prev_index(i: int, n: int) -> int:
    """Periodic predecessor on [1, n]: 0 wraps to n."""
    return n if i == 1 else i - 1
