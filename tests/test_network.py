import copy

import numpy as np
import pytest

import config
from neural.network import NetArch, Network


@pytest.mark.parametrize("inputs,outputs,hidden,layers", [(1, 1, 1, 1), (4, 4, 8, 1), (6, 3, 5, 2), (3, 2, 4, 0)])
def test_predict_returns_every_layer(inputs, outputs, hidden, layers, np_rng):
    arch = NetArch(inputs, outputs, hidden, hidden_layers=layers)
    net = Network(arch, rng=np_rng)
    result = net.predict([0.3] * inputs)

    assert len(result) == layers + 2
    assert len(result[0]) == inputs + 1
    assert result[0][-1] == 1.0
    assert len(result[-1]) == outputs
    assert all(isinstance(v, float) for layer in result for v in layer)
    assert all(-1.0 <= v <= 1.0 for v in result[-1])


def test_input_values_roundtrip_through_float32(np_rng):
    net = Network(NetArch(2, 2, 3), rng=np_rng)
    first = net.predict([0.1, 0.2])[0]
    assert first[0] == pytest.approx(0.1, abs=1e-7)
    assert first[0] == float(np.float32(0.1))


@pytest.mark.parametrize("kwargs", [
    dict(inputs=0, outputs=1, hidden=1),
    dict(inputs=1, outputs=-2, hidden=1),
    dict(inputs=1, outputs=1, hidden=0),
    dict(inputs=1, outputs=1, hidden=1, hidden_layers=-1),
    dict(inputs=1.5, outputs=1, hidden=1),
    dict(inputs=1, outputs=1, hidden=1, hidden_layers=1.5),
    dict(inputs=True, outputs=1, hidden=1),
    dict(inputs=1, outputs=1, hidden=1, hidden_layers=False),
])
def test_arch_rejects_invalid_sizes(kwargs):
    with pytest.raises(ValueError):
        NetArch(**kwargs)


def test_wrong_input_width_raises(np_rng):
    net = Network(NetArch(3, 2, 4), rng=np_rng)
    with pytest.raises(ValueError):
        net.predict([0.0] * 5)


def test_mutate_changes_weights_not_shapes(np_rng):
    net = Network(NetArch(4, 4, 8), rng=np_rng)
    before = net.parameters()
    shapes = net.shapes
    net.mutate(config.REPRODUCTION_MUTATION_STRENGTH, rng=np_rng)

    assert net.shapes == shapes
    assert net.parameters().shape == before.shape
    assert not np.array_equal(net.parameters(), before)
    assert all(w.dtype == np.float32 for w in net.weights)


def test_mutate_zero_strength_is_noop(np_rng):
    net = Network(NetArch(2, 2, 2), rng=np_rng)
    before = net.parameters()
    net.mutate(0.0, rng=np_rng)
    assert np.array_equal(net.parameters(), before)


def test_init_spread_is_wider_than_reproduction_step():
    rng = np.random.default_rng(7)
    arch = NetArch(8, 8, 32)
    fresh = Network(arch, rng=rng)
    child = fresh.clone()
    child.mutate(config.REPRODUCTION_MUTATION_STRENGTH, rng=rng)

    init_spread = np.std(fresh.parameters())
    step = np.std(child.parameters() - fresh.parameters())
    assert step < init_spread


def test_clone_predicts_identically_and_is_independent(np_rng):
    net = Network(NetArch(4, 4, 8, hidden_layers=2), rng=np_rng)
    x = [0.5, -0.25, 0.9, 0.0]
    twin = net.clone()
    deep = copy.deepcopy(net)
    assert twin.predict(x) == net.predict(x)
    assert deep.predict(x) == net.predict(x)

    twin.mutate(1.0, rng=np_rng)
    assert twin.predict(x) != net.predict(x)
    assert deep.predict(x) == net.predict(x)


def test_param_count_matches_arch(np_rng):
    net = Network(NetArch(4, 3, 5), rng=np_rng)
    # (5 x 5 + 5) + (3 x 5 + 3)
    assert net.param_count == 30 + 18
    assert net.parameters().size == net.param_count


def test_mutation_scale_sets_noise_and_survives_clone():
    arch = NetArch(8, 8, 32)
    coarse = Network(arch, strength=1.0, rng=np.random.default_rng(3), mutation_scale=1.0)
    fine = Network(arch, strength=1.0, rng=np.random.default_rng(3), mutation_scale=0.01)
    assert np.std(fine.parameters()) < np.std(coarse.parameters()) / 10

    twin = fine.clone()
    assert twin.mutation_scale == 0.01
    before = twin.parameters()
    twin.mutate(1.0, rng=np.random.default_rng(4))
    assert np.max(np.abs(twin.parameters() - before)) < 0.1
