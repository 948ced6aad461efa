# %% Import necessary objects and functions   # noqa: D100
from tabula.codes import available_codes, get_code_info
from tabula.simulator import Simulator

# %% The catalog contains a few small codes
for name in available_codes():
    info = get_code_info(name)
    params = f"[[{info.n_qubits},{info.n_logical},{info.distance}]]"
    print(f"{name:>12}: {params}", info.name)

# %% Start a session on the Steane code
sim = Simulator("steane")
print(sim)

# %% Put a bit flip on qubit 3 and look at the violated checks
sim.apply_error(3, "X")
print(sim.get_syndrome())
print("Triggered:", sim.get_triggered_stabilizers())

# %% A second error on the same qubit *replaces* the first one
sim.apply_error(3, "Y")
print(sim.get_applied_errors())
print("Triggered:", sim.get_triggered_stabilizers())

# %% Switch to the surface code, errors are cleared
sim.reset("surface_d3")
sim.apply_error(4, "Z")
print(sim)
print(sim.to_json(indent=2))
