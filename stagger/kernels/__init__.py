"""
Kernel executors for stagger.

This module provides executor implementations and a registry that maps an
Architecture to the executor that runs kernels on it.

Usage:
    from stagger.kernels import get_executor

    executor = get_executor(grid.architecture)
    executor.pair_stencil(stencil, grid, src.data, dst.data)

Submodules:
- protocol: KernelExecutor interface and stencil descriptions
- serial: Sequential reference executor (numpy storage)
- parallel: Taichi executor (multi-threaded CPU or accelerator)
"""

import logging
from typing import Type

from stagger.core.architecture import Architecture
from stagger.kernels.parallel import TaichiExecutor
from stagger.kernels.protocol import (
    Direction,
    KernelExecutor,
    PairStencil,
    Reduction,
)
from stagger.kernels.serial import SerialExecutor

logger = logging.getLogger(__name__)


class KernelRegistry:
    """Registry of executor implementations keyed by architecture.

    Allows runtime selection of the executor without changing operator
    code. Useful for:
    - Running the same operators sequentially or on an accelerator
    - Equivalence testing between executors
    - Plugging in an experimental executor

    Example:
        registry = KernelRegistry()
        serial = registry.get(Architecture.SERIAL)
        registry.register(Architecture.GPU, MyGPUExecutor)
    """

    def __init__(self):
        """Initialize registry with the built-in executors."""
        self._executors: dict[Architecture, Type[KernelExecutor]] = {
            Architecture.SERIAL: SerialExecutor,
            Architecture.CPU: TaichiExecutor,
            Architecture.GPU: TaichiExecutor,
        }

    def get(self, architecture: Architecture) -> KernelExecutor:
        """Get an executor instance for an architecture.

        Args:
            architecture: Architecture the kernels should run on

        Returns:
            Executor instance implementing the KernelExecutor protocol

        Raises:
            KeyError: If no executor is registered for the architecture
        """
        if architecture not in self._executors:
            raise KeyError(
                f"No executor registered for architecture {architecture}. "
                f"Available: {list(self._executors.keys())}"
            )
        return self._executors[architecture]()

    def register(
        self, architecture: Architecture, executor_cls: Type[KernelExecutor]
    ) -> None:
        """Register an executor implementation.

        Args:
            architecture: Architecture to register under
            executor_cls: Class implementing the KernelExecutor protocol
        """
        logger.info(
            "Registering %s for architecture %s",
            executor_cls.__name__,
            architecture.value,
        )
        self._executors[architecture] = executor_cls

    def available_architectures(self) -> list[Architecture]:
        """List architectures with a registered executor."""
        return list(self._executors.keys())


# Default registry instance for convenience
_default_registry = KernelRegistry()


def get_registry() -> KernelRegistry:
    """Get the default kernel registry.

    Returns:
        The global KernelRegistry instance
    """
    return _default_registry


def get_executor(architecture: Architecture) -> KernelExecutor:
    """Executor for ``architecture`` from the default registry."""
    return _default_registry.get(architecture)


__all__ = [
    # Registry
    "KernelRegistry",
    "get_registry",
    "get_executor",
    # Protocol types
    "KernelExecutor",
    "PairStencil",
    "Direction",
    "Reduction",
    # Implementations
    "SerialExecutor",
    "TaichiExecutor",
]
