"""Example usage of the deepcheck comparison engine."""

import json
from dataclasses import dataclass, field
from typing import Optional

import numpy

from deepcheck import DeepCheckEngine, EngineConfig, Ref, unexported


@dataclass
class LineItem:
    sku: str
    quantity: int
    unit_price: float
    _cache_key: str = ""  # Leading underscore: not exported


@dataclass
class Invoice:
    id: str
    total: float
    items: list[LineItem] = field(default_factory=list)
    parent: Optional[Ref["Invoice"]] = None
    fetched_at: str = unexported(default="")


# Invoice built by the code under test
actual_invoice = Invoice(
    id="INV-001",
    total=100.0,
    items=[
        LineItem("WIDGET-001", 5, 10.0, _cache_key="w1"),
        LineItem("GADGET-002", 2, 25.0, _cache_key="g2"),
    ],
    fetched_at="2025-02-02T10:30:00Z",
)

# Expectation written in the test
expected_invoice = Invoice(
    id="INV-001",
    total=100.0,
    items=[
        LineItem("WIDGET-001", 5, 10.0),
        LineItem("GADGET-002", 2, 25.0),
    ],
)


def main():
    print("=" * 60)
    print("deepcheck Comparison Engine - Example")
    print("=" * 60)

    engine = DeepCheckEngine()

    # Full structural equality sees the private fields
    print(f"\nequal: {engine.equal(expected_invoice, actual_invoice)}")

    # Comparing only exported fields ignores them
    verdict = engine.check("equal_exported_values", expected_invoice, actual_invoice)
    print(f"equal_exported_values: {verdict.passed}")

    # Numeric comparison always widens before comparing
    print(f"\nequal_values(int8(5), int64(5)): "
          f"{engine.equal_values(numpy.int8(5), numpy.int64(5))}")
    print(f"equal_values(int16(300), int8(44)): "
          f"{engine.equal_values(numpy.int16(300), numpy.int8(44))}")


def example_with_mismatch():
    """Example that demonstrates an elements mismatch."""
    print("\n" + "=" * 60)
    print("Example with Mismatch")
    print("=" * 60)

    engine = DeepCheckEngine()
    verdict = engine.check("elements_match", [1, 2, 2, 3], [2, 3, 3, 4])

    print(f"\nPassed: {verdict.passed}")
    print(f"Message: {verdict.message}")
    print(json.dumps(verdict.to_dict(), indent=2))


def example_with_tracing():
    """Example with operation tracing enabled."""
    print("\n" + "=" * 60)
    print("Example with Tracing")
    print("=" * 60)

    config = EngineConfig(trace_operations=True)
    engine = DeepCheckEngine(config)

    engine.is_empty(Ref(""))
    engine.is_nil(Ref())
    engine.diff_lists(["a", "b"], ["b", "a", "c"])

    print(f"\nTraces:")
    for trace in engine.traces:
        print(f"  - {trace.operation} [{trace.shape.value}] -> {trace.result}")
        if trace.details:
            print(f"    Details: {trace.details}")


if __name__ == "__main__":
    main()
    example_with_mismatch()
    example_with_tracing()
