import math

import numpy as np
import pytest

from tinymlp.core.activations import sigmoid, sigmoid_deriv
from tinymlp.core.errors import InvalidConfigurationError, OutOfRangeError
from tinymlp.core.layer import Layer
from tinymlp.core.neuron import Neuron


def test_input_unit_is_identity_without_bias():
    unit = Neuron()
    assert not unit.trainable
    assert unit.bias == 0.0
    unit.set_input(2.5)
    unit.activate()
    unit.derive()
    assert unit.activation == 2.5
    assert unit.derivative == 1.0
    with pytest.raises(InvalidConfigurationError):
        unit.set_bias(0.3)


def test_sigmoid_unit_uses_input_plus_bias():
    unit = Neuron(bias=0.5)
    unit.set_input(0.25)
    unit.activate()
    unit.derive()
    z = 0.75
    expected = 1.0 / (1.0 + math.exp(-z))
    assert unit.activation == pytest.approx(expected, abs=1e-12)
    assert unit.derivative == pytest.approx(expected * (1.0 - expected), abs=1e-12)


def test_neuron_state_is_stale_until_recomputed():
    unit = Neuron(bias=0.0)
    before = unit.activation
    unit.set_input(3.0)
    assert unit.activation == before
    unit.activate()
    assert unit.activation == pytest.approx(sigmoid(3.0))


def test_random_bias_in_range():
    rng = np.random.default_rng(5)
    for _ in range(50):
        unit = Neuron.with_random_bias(rng, (-0.25, 0.25))
        assert -0.25 <= unit.bias < 0.25


def test_layer_set_input_recomputes():
    layer = Layer(3)
    layer.set_bias_at(1, 0.5)
    layer.set_input_at(1, 1.0)
    assert layer[1].activation == pytest.approx(sigmoid(1.5))
    assert layer[1].derivative == pytest.approx(sigmoid_deriv(1.5))


def test_layer_set_bias_recomputes():
    layer = Layer(2)
    layer.set_input_at(0, 0.2)
    layer.set_bias_at(0, -0.7)
    assert layer.get_bias_at(0) == -0.7
    assert layer.get_activations()[0] == pytest.approx(sigmoid(-0.5))
    assert layer.get_derivatives()[0] == pytest.approx(sigmoid_deriv(-0.5))


def test_input_layer_passes_values_through():
    layer = Layer(2, input_layer=True)
    layer.set_input_at(0, 0.75)
    layer.set_input_at(1, -2.0)
    assert np.array_equal(layer.get_inputs(), [0.75, -2.0])
    assert np.array_equal(layer.get_activations(), [0.75, -2.0])
    assert np.array_equal(layer.get_derivatives(), [1.0, 1.0])
    assert np.array_equal(layer.get_biases(), [0.0, 0.0])


def test_bulk_reads_are_fresh_copies():
    layer = Layer(2)
    acts = layer.get_activations()
    acts[0] = 42.0
    assert layer.get_activations()[0] != 42.0


def test_layer_size_is_fixed():
    layer = Layer(4, rng=np.random.default_rng(0))
    assert len(layer) == layer.size == 4
    assert len(layer.get_inputs()) == 4
    assert all(-1.0 <= b < 1.0 for b in layer.get_biases())


@pytest.mark.parametrize("idx", [-1, 3, 10])
def test_layer_index_out_of_range(idx):
    layer = Layer(3)
    with pytest.raises(OutOfRangeError):
        layer.set_input_at(idx, 1.0)
    with pytest.raises(OutOfRangeError):
        layer.set_bias_at(idx, 1.0)
    with pytest.raises(OutOfRangeError):
        layer.get_bias_at(idx)
    with pytest.raises(OutOfRangeError):
        layer[idx]


def test_layer_rejects_non_positive_size():
    with pytest.raises(InvalidConfigurationError):
        Layer(0)


@pytest.mark.parametrize("z", [-1000.0, -745.0, 1000.0])
def test_sigmoid_saturates_without_overflow(z):
    value = sigmoid(z)
    assert value == (0.0 if z < 0 else 1.0)
    assert sigmoid_deriv(z) == 0.0


@pytest.mark.parametrize("idx", [0.5, 1.0, "1"])
def test_layer_non_integral_index_rejected(idx):
    layer = Layer(3)
    with pytest.raises(OutOfRangeError):
        layer.set_input_at(idx, 1.0)
    with pytest.raises(OutOfRangeError):
        layer.get_bias_at(idx)
