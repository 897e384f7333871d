"""JSON utilities."""

from __future__ import annotations

import json
from typing import Any

import numpy as np
import pandas as pd


class NumpyEncoder(json.JSONEncoder):
    """Custom JSONEncoder for numpy and pandas data types.

    Used to serialize process parameters when computing :attr:`Process.hash`.

    Examples
    --------
    >>> import json
    >>> import numpy as np
    >>> from volcash.utils.json import NumpyEncoder

    >>> data = np.array([0, 1, 2, 3])
    >>> json.dumps(data, cls=NumpyEncoder)
    '[0, 1, 2, 3]'

    >>> data = np.datetime64(1234567890, "s")
    >>> json.dumps(data, cls=NumpyEncoder)
    '"2009-02-13T23:31:30"'
    """

    def default(self, obj: Any) -> Any:
        """Encode numpy data types.

        This method overrides :meth:`default` on the JSONEncoder class.

        Parameters
        ----------
        obj : Any
            Object to encode.

        Returns
        -------
        Any
            Encoded object.
        """
        # before np.integer: np.timedelta64 subclasses np.signedinteger
        if isinstance(obj, (np.timedelta64, np.datetime64, pd.Timestamp, pd.Timedelta)):
            return str(obj)

        if isinstance(obj, np.integer):
            return int(obj)

        if isinstance(obj, np.floating):
            return float(obj)

        if isinstance(obj, np.bool_):
            return bool(obj)

        if isinstance(obj, np.ndarray):
            return obj.tolist()

        if isinstance(obj, (pd.Series, pd.Index)):
            return obj.to_numpy().tolist()

        return json.JSONEncoder.default(self, obj)
