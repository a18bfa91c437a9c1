"""Walkthrough: tracking a computation from submission to its final result.

This example plays the role of both the client and the execution engine:
it submits a computation to a manager, then reports progress item by item
in the order the manager says the checkpoints may be requested.
"""

from pathlib import Path

import karps

here = Path(__file__).parent

# Load the computation description
computation_file = karps.load_computation_file(here / "pipeline.toml")

manager = karps.ComputationManager()
session = manager.create_session(computation_file.session_id)
computation = manager.execute(session, computation_file.computation_id, computation_file.to_items())

# Only the local items are tracked; the distributed joins are inlined away
for path, deps in computation.tracked_item_dependencies.items():
    print(f"{path.local}: {[str(dep.local) for dep in deps]}")

# Pretend to be the engine: run whatever is ready until nothing is left
while ready := manager.ready_checkpoints(session, computation.id):
    manager.update([(path, karps.Running()) for path in ready])
    manager.update([(path, karps.Done(f"value of {path.local}")) for path in ready])

print(manager.final_result(computation.output.path))
