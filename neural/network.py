"""
cell_evo module: neural/network.py

Fixed-topology feed-forward network:
- input layer gets an implicit bias channel (constant 1.0)
- hidden layers and output layer use tanh
- parameters are float32; the public API speaks Python floats
- topology is fixed at construction, only weight values mutate
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

import config

BIAS_INPUT = 1.0

_default_rng = np.random.default_rng()


@dataclass(frozen=True)
class NetArch:
    """Sizes that define a Network. Validated once, here."""
    inputs: int
    outputs: int
    hidden: int
    hidden_layers: int = 1

    def __post_init__(self) -> None:
        for name, lowest in (("inputs", 1), ("outputs", 1), ("hidden", 1), ("hidden_layers", 0)):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < lowest:
                raise ValueError(f"NetArch.{name} must be an int >= {lowest}, got {value!r}")

    @property
    def layer_sizes(self) -> Tuple[int, ...]:
        return (self.inputs + 1,) + (self.hidden,) * self.hidden_layers + (self.outputs,)

    @staticmethod
    def from_config(cfg: "config.SimConfig") -> "NetArch":
        return NetArch(
            inputs=cfg.num_inputs,
            outputs=cfg.num_outputs,
            hidden=cfg.num_hidden,
            hidden_layers=cfg.hidden_layers,
        )


class Network:
    def __init__(
        self,
        arch: NetArch,
        strength: float = config.INIT_MUTATION_STRENGTH,
        rng: Optional[np.random.Generator] = None,
        mutation_scale: float = config.MUTATION_SCALE,
    ):
        self.arch = arch
        self.mutation_scale = mutation_scale
        sizes = arch.layer_sizes
        self.weights: List[np.ndarray] = [
            np.zeros((n_out, n_in), dtype=np.float32) for n_in, n_out in zip(sizes[:-1], sizes[1:])
        ]
        self.biases: List[np.ndarray] = [np.zeros(n_out, dtype=np.float32) for n_out in sizes[1:]]
        self.mutate(strength, rng=rng)

    @classmethod
    def _empty(cls, arch: NetArch, mutation_scale: float) -> "Network":
        net = cls.__new__(cls)
        net.arch = arch
        net.mutation_scale = mutation_scale
        net.weights = []
        net.biases = []
        return net

    def clone(self) -> "Network":
        net = Network._empty(self.arch, self.mutation_scale)
        net.weights = [w.copy() for w in self.weights]
        net.biases = [b.copy() for b in self.biases]
        return net

    def __deepcopy__(self, memo) -> "Network":
        return self.clone()

    @property
    def shapes(self) -> List[Tuple[Tuple[int, ...], Tuple[int, ...]]]:
        return [(w.shape, b.shape) for w, b in zip(self.weights, self.biases)]

    @property
    def param_count(self) -> int:
        return sum(w.size + b.size for w, b in zip(self.weights, self.biases))

    def parameters(self) -> np.ndarray:
        """Flat float32 copy of every weight then bias, layer by layer."""
        parts = []
        for w, b in zip(self.weights, self.biases):
            parts.append(w.ravel())
            parts.append(b)
        return np.concatenate(parts)

    def predict(self, inputs: Sequence[float]) -> List[List[float]]:
        """
        Run a forward pass and return the activation of every layer,
        input layer (with bias channel) first, output layer last.
        """
        x = np.asarray(inputs, dtype=np.float32)
        x = np.append(x, np.float32(BIAS_INPUT))
        layers = [x]
        for w, b in zip(self.weights, self.biases):
            x = np.tanh(w @ x + b)
            layers.append(x)
        return [layer.astype(np.float64).tolist() for layer in layers]

    def mutate(self, strength: float, rng: Optional[np.random.Generator] = None) -> None:
        """Add gaussian noise (std = strength * mutation_scale) to every weight and bias."""
        rng = rng if rng is not None else _default_rng
        sigma = float(strength) * self.mutation_scale
        if sigma == 0.0:
            return
        for w in self.weights:
            w += rng.normal(0.0, sigma, size=w.shape).astype(np.float32)
        for b in self.biases:
            b += rng.normal(0.0, sigma, size=b.shape).astype(np.float32)
