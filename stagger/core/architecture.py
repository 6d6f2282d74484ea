"""Execution architectures.

An Architecture is resolved once per process (see ``stagger.config``) and
passed explicitly to every grid. Fields allocate storage on their grid's
architecture and operators pick the matching executor from the kernel
registry.
"""

from enum import Enum


class Architecture(Enum):
    """Where fields live and kernels run.

    SERIAL: Sequential reference loops over numpy arrays (no Taichi runtime)
    CPU: Taichi kernels, multi-threaded on the host
    GPU: Taichi kernels, one work-item per cell on CUDA/Vulkan/Metal
    """

    SERIAL = "serial"
    CPU = "cpu"
    GPU = "gpu"

    @property
    def uses_taichi(self) -> bool:
        """True if fields on this architecture are Taichi fields."""
        return self is not Architecture.SERIAL
