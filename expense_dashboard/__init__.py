"""Top‑level package for the Expense Dashboard.

The primary modules are:

* ``aggregation`` – pure functions deriving totals, series and filters
* ``ledger`` – validation plus add/remove operations on the expense list
* ``session`` – the explicit dashboard state and its transitions
* ``visualization`` – functions that generate Plotly figures
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run expense_dashboard/dashboard.py
```
"""

from . import aggregation  # noqa: F401  # re-exported for convenience
from . import ledger  # noqa: F401  # re-exported for convenience
from . import session  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience
# Import dashboard lazily.  Streamlit may not be installed in all
# environments (e.g. during unit testing).
try:
    from . import dashboard  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    dashboard = None  # type: ignore


__all__ = ["aggregation", "ledger", "session", "visualization", "dashboard"]
