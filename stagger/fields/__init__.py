"""Field management for stagger.

This module provides the Field type and declarative field containers.

Main classes:
- Field: Typed 3-D array anchored to a grid at a staggered location
- FieldSpec: Declarative field specification
- FieldRole: Field categorization (PROGNOSTIC, DIAGNOSTIC, TEMPORARY)
- FieldContainer: Allocates a set of Fields on one grid

Convenience wrappers:
- VelocityFields: u, v, w on their face locations
- TracerFields: Cell-centred tracers by name
- TemporaryFields: Scratch pool for operator compositions

Factory functions:
- create_state_container, create_temporary_fields, etc.
"""

from stagger.fields.base import FieldContainer, FieldRole, FieldSpec
from stagger.fields.field import Field
from stagger.fields.state import (
    TracerFields,
    VelocityFields,
    create_state_container,
    create_tracer_specs,
    create_velocity_specs,
)
from stagger.fields.temporary import (
    TemporaryFields,
    create_temporary_container,
    create_temporary_fields,
    create_temporary_specs,
)

__all__ = [
    # Core classes
    "Field",
    "FieldContainer",
    "FieldRole",
    "FieldSpec",
    # Convenience wrappers
    "VelocityFields",
    "TracerFields",
    "TemporaryFields",
    # Factory functions
    "create_velocity_specs",
    "create_tracer_specs",
    "create_temporary_specs",
    "create_state_container",
    "create_temporary_container",
    "create_temporary_fields",
]
