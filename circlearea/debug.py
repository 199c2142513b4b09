
from typing import Dict, List

from circlearea import Circle, area_report


def gen_scenarios() -> Dict[str, Dict[str, List[Circle]]]:
    """
    Builds a set of reference configurations.

    Each scenario maps to {'circles': targets, 'universe': all circles}.
    """
    a, b = Circle(x=0.0, y=0.0, radius=1.0), Circle(x=1.0, y=0.0, radius=1.0)
    big, small = Circle(x=0.0, y=0.0, radius=2.0), Circle(x=0.0, y=0.0, radius=1.0)
    c = Circle(x=0.5, y=0.8660254037844386, radius=1.0)
    cover = Circle(x=0.5, y=0.0, radius=1.2)
    bite = Circle(x=0.5, y=1.2, radius=0.5)

    return {
        'lens': {'circles': [a, b], 'universe': [a, b]},
        'reuleaux': {'circles': [a, b, c], 'universe': [a, b, c]},
        'nested': {'circles': [big, small], 'universe': [big, small]},
        'covered': {'circles': [a, b], 'universe': [a, b, cover]},
        'bitten': {'circles': [a, b], 'universe': [a, b, bite]},
    }


def run_scenarios(config):
    """Prints the area breakdown of each requested scenario."""
    scenarios = gen_scenarios()

    print("--- Computing Areas ---")
    for name in config['SCENARIOS']:
        scenario = scenarios[name]
        report = area_report(scenario['circles'], scenario['universe'])

        print(f"{name}: area {report.area:.6f}")
        if config['VERBOSE']:
            print(f"  Polygon Area: {report.polygon_area:.6f}")
            print(f"  Arc Area: {report.arc_area:.6f}")
            print(f"  Boundary Points: {len(report.inner_points)}")
            for arc in report.arcs:
                sign = '+' if arc.within else '-'
                print(
                    f"  {sign} arc r={float(arc.circle.radius):.2f} "
                    f"({arc.p2.x:.3f}, {arc.p2.y:.3f}) -> ({arc.p1.x:.3f}, {arc.p1.y:.3f}) "
                    f"width {arc.width:.4f}"
                )

    print("--- Finished ---")

if __name__ == "__main__":
    config = {
        'SCENARIOS': ['lens', 'reuleaux', 'nested', 'covered', 'bitten'],
        'VERBOSE': True,
    }
    run_scenarios(config)
