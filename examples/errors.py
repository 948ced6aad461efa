# In[1]:
import pandas as pd

from tabula.errors import errors_from_dataframe, errors_to_dataframe
from tabula.simulator import Simulator

# In[2]:
# Several errors on the same qubit: only the last one survives, with a warning
df = pd.DataFrame({"qubit": [0, 2, 0, 6], "kind": ["X", "Z", "Y", "X"]})
errors = errors_from_dataframe(df)
print(errors_to_dataframe(errors))

# In[3]:
sim = Simulator("five_qubit" if max(e.qubit for e in errors) < 5 else "steane")
for e in errors:
    sim.apply_error(e.qubit, e.kind)
print(sim)
