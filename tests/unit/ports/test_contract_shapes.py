import importlib
import inspect

import pytest

from file_env.adapters.env_source import EnvSource
from file_env.adapters.memory_source import MemorySource
from file_env.adapters.telemetry.jsonl import JsonlTelemetry

# Mapping of module -> (ProtocolName, required_methods: {name: arity})
PORT_PROTOCOLS = {
    "file_env.ports.key_value_source": (
        "KeyValueSource",
        {"iter": 0, "filter": 1, "describe": 0, "profile": -1},  # profile is a property
    ),
    "file_env.ports.telemetry": ("Telemetry", {"log": -1}),  # variable kwargs
}

ADAPTERS = {
    "file_env.ports.key_value_source": [EnvSource, MemorySource],
    "file_env.ports.telemetry": [JsonlTelemetry],
}


def _positional_arity(fn) -> int:
    sig = inspect.signature(fn)
    # remove self / cls
    params = [p for p in sig.parameters.values() if p.kind == p.POSITIONAL_OR_KEYWORD][1:]
    return len(params)


@pytest.mark.parametrize("module_name,meta", PORT_PROTOCOLS.items())
def test_required_port_signatures(module_name, meta):
    proto_name, methods = meta
    module = importlib.import_module(module_name)
    proto = getattr(module, proto_name)
    assert inspect.isclass(proto), f"{proto_name} not a class"
    for method_name, arity in methods.items():
        fn = getattr(proto, method_name, None)
        assert fn is not None, f"Missing method {method_name} on {proto_name}"
        if arity >= 0:
            assert (
                _positional_arity(fn) == arity
            ), f"{proto_name}.{method_name} expected {arity} args"


@pytest.mark.parametrize("module_name,meta", PORT_PROTOCOLS.items())
def test_adapters_match_ports(module_name, meta):
    _, methods = meta
    for adapter in ADAPTERS[module_name]:
        for method_name, arity in methods.items():
            if arity < 0:
                continue
            fn = getattr(adapter, method_name, None)
            assert fn is not None, f"{adapter.__name__} lacks {method_name}"
            assert _positional_arity(fn) == arity, f"{adapter.__name__}.{method_name}"
