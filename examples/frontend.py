# In[1]:
from pathlib import Path
from pprint import pprint
from tempfile import mkdtemp

from tabula.errors import PauliError, save_errors_csv
from tabula.frontend import SimulationConfig

# In[2]:
workdir = Path(mkdtemp())
save_errors_csv([PauliError(0, "X"), PauliError(5, "Z")], workdir / "errors.csv")

(workdir / "session.toml").write_text(
    f"""
code = "shor"
errors_csv = "{(workdir / 'errors.csv').as_posix()}"

[[errors]]
qubit = 5
kind = "Y"
"""
)

# In[3]:
conf = SimulationConfig.load_toml(workdir / "session.toml")
pprint(conf)
sim = conf.instantiate()
print(sim)

# In[4]:
# Same session, different code
conf.update(code="surface_d3")
print(conf.instantiate().get_triggered_stabilizers())
