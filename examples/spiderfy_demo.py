#!/usr/bin/env python3
"""
Demo script: synthesize meters, find coincident ones and spread them out.
"""

from py_spiderfy.core import (
    CoincidenceResolver, PointSynthesizer, StatusFilter, to_feature_collection,
)
from py_spiderfy.logging_config import configure_logging
from py_spiderfy.utils.random import set_random_seed


def main():
    """Demonstrate duplicate detection and spiderfy."""
    configure_logging("WARNING")
    set_random_seed(2024)

    print("Py-Spiderfy Demo")
    print("=" * 40)

    points = PointSynthesizer().generate_with_duplicates(20)
    print(f"\nGenerated {len(points)} points")

    resolver = CoincidenceResolver()
    duplicates = resolver.detect_duplicates(points)
    print(f"Coincident points: {len(duplicates)}")
    for point in duplicates:
        print(f"  #{point.serial_number:<4} {point.station:<12} {point.coordinates}")

    print("\nSpiderfied (radius=0.001):")
    for point in resolver.spiderfy(duplicates, radius=0.001):
        print(f"  #{point.serial_number:<4} ({point.longitude:.6f}, {point.latitude:.6f})")

    resolved = resolver.resolve(points, radius=0.001)
    remaining = resolver.detect_duplicates(resolved)
    print(f"\nAfter resolve: {len(remaining)} coincident points remain")

    collection = to_feature_collection(resolved, StatusFilter(red=False))
    print(f"GeoJSON features without red meters: {len(collection['features'])}")


if __name__ == "__main__":
    main()
