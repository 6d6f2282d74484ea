"""
Architecture selection and Taichi initialization.

Environment variables:
    STAGGER_BACKEND: 'serial', 'cpu', 'cuda', 'vulkan', 'metal', or 'auto' (default)
    STAGGER_DEBUG: '1' to enable Taichi debug mode

The architecture is chosen once per process; init_taichi returns the
Architecture value that callers pass to RegularCartesianGrid.
"""

import logging
import os
import subprocess

import taichi as ti

from stagger.core.architecture import Architecture
from stagger.core.dtypes import DTYPE

logger = logging.getLogger(__name__)

GPU_BACKENDS = ("cuda", "vulkan", "metal")


def get_backend() -> str:
    """Determine backend: check env var, then auto-detect."""
    env = os.environ.get("STAGGER_BACKEND", "auto").lower()

    if env in ("serial", "cpu") or env in GPU_BACKENDS:
        return env
    if env != "auto":
        raise ValueError(f"Invalid STAGGER_BACKEND: {env}")

    # Auto-detect CUDA
    try:
        result = subprocess.run(
            ["nvidia-smi", "-L"], capture_output=True, text=True, timeout=5
        )
        if result.returncode == 0 and "GPU" in result.stdout:
            return "cuda"
    except (FileNotFoundError, subprocess.TimeoutExpired):
        logger.debug("nvidia-smi unavailable, using cpu backend")

    return "cpu"


def resolve_architecture(backend: str) -> Architecture:
    """Map a backend name to the Architecture fields should live on.

    Does not initialize Taichi.
    """
    if backend == "serial":
        return Architecture.SERIAL
    if backend == "cpu":
        return Architecture.CPU
    if backend in GPU_BACKENDS:
        return Architecture.GPU
    raise ValueError(f"Unknown backend: {backend}")


def init_taichi(
    backend: str | None = None,
    debug: bool | None = None,
    fast_math: bool = False,
    kernel_profiler: bool = False,
) -> Architecture:
    """Initialize Taichi with specified or auto-detected backend.

    ``None`` and "auto" defer to get_backend (STAGGER_BACKEND, then
    hardware detection). The serial backend needs no Taichi runtime and
    returns immediately.
    ``fast_math`` stays off by default so the Taichi executor matches the
    serial one to the last bit.
    """
    if backend is None or backend == "auto":
        backend = get_backend()
    if debug is None:
        debug = os.environ.get("STAGGER_DEBUG", "0") == "1"

    architecture = resolve_architecture(backend)
    if not architecture.uses_taichi:
        logger.info("Using serial backend")
        return architecture

    arch = {
        "cpu": ti.cpu,
        "cuda": ti.cuda,
        "vulkan": ti.vulkan,
        "metal": ti.metal,
    }[backend]

    ti.init(
        arch=arch,
        default_fp=DTYPE,
        debug=debug,
        fast_math=fast_math,
        offline_cache=True,
        kernel_profiler=kernel_profiler,
    )
    logger.info("Initialized Taichi on %s (debug=%s)", backend, debug)
    return architecture
