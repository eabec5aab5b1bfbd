"""
Built-in Scenarios
===================
Scripted play-throughs used by the CLI demo and the tests.

  A: Calm talk   - mostly positive replies, stress stays low
  B: Breakdown   - hostile replies push stress to game over
  C: Coping      - stress climbs into the danger zone, relief items pull it back
"""


def scenario_a_calm() -> dict:
    steps = []
    for i in range(8):
        steps.append({"kind": "response", "action": "POSITIVE" if i % 3 == 0 else None})
    steps.append({"kind": "audio"})
    return {"name": "A: Calm talk", "profile": {"stress": {"starting": 30.0}}, "steps": steps}


def scenario_b_breakdown() -> dict:
    steps = [{"kind": "response", "action": "NEGATIVE"} for _ in range(5)]
    # after game over these are ignored
    steps += [{"kind": "response", "action": "POSITIVE"}, {"kind": "use_item", "item": "energy_drink"}]
    return {
        "name": "B: Breakdown",
        "profile": {
            "stress": {"starting": 10.0},
            "items": [{"name": "energy_drink", "reduction": 15.0, "max_uses": 1}],
        },
        "steps": steps,
    }


def scenario_c_coping() -> dict:
    steps = [{"kind": "response", "action": "NEGATIVE"} for _ in range(3)]
    steps += [
        {"kind": "use_item", "item": "coffee"},
        {"kind": "use_item", "item": "coffee"},       # cooling down
        {"kind": "advance", "seconds": 5},
        {"kind": "use_item", "item": "coffee"},
        {"kind": "interact", "item": "energy_drink", "distance": 1.5},
        {"kind": "interact", "item": "energy_drink", "distance": 1.5},  # empty
        {"kind": "refill", "item": "energy_drink"},
        {"kind": "leave", "item": "energy_drink", "distance": 6.0},
        {"kind": "response", "action": None},
    ]
    return {
        "name": "C: Coping",
        "profile": {
            "stress": {"starting": 20.0},
            "items": [
                {"name": "energy_drink", "reduction": 15.0, "max_uses": 1},
                {"name": "coffee", "reduction": 10.0, "max_uses": 3, "cooldown_sec": 5.0},
            ],
        },
        "steps": steps,
    }


SCENARIOS = {
    "a": scenario_a_calm,
    "b": scenario_b_breakdown,
    "c": scenario_c_coping,
}
