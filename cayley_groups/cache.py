import os, json, hashlib, datetime, pathlib, logging, pickle, zipfile
import numpy as np

from .config import CACHE_SCHEMA
from .errors import CayleyError
from .table import Table

logger = logging.getLogger(__name__)


# ---------- utilities ----------
def _ensure_dir(p: str):
    pathlib.Path(p).mkdir(parents=True, exist_ok=True)


def _check_name(name: str):
    """names become file names under root: no path separators, no dot entries"""
    seps = {"/", os.sep, os.altsep} - {None}
    if not isinstance(name, str) or name in ("", ".", "..") or any(s in name for s in seps):
        raise ValueError(f"invalid cache name: {name!r}")


def fingerprint_table(table: Table) -> str:
    """Stable short fingerprint of a table's index matrix."""
    T = np.ascontiguousarray(table.indices)
    h = hashlib.blake2b(digest_size=12)
    h.update(str(T.shape).encode()); h.update(str(T.dtype).encode())
    h.update(T.tobytes())
    return h.hexdigest()


# ---------- table cache ----------
class TableCache:
    """
    Name-keyed store of finished tables.

    Always keeps an in-memory map; when `root` is given each table is also written
    as `<root>/tables/<name>.npz` (index matrix + elements) with a JSON summary
    beside it, and misses fall back to disk. Tables read from disk are validated
    again on load.
    """

    def __init__(self, root: str | None = None):
        self._memory: dict[str, Table] = {}
        self.root = root
        self.dir_tables = os.path.join(root, "tables") if root is not None else None
        if self.dir_tables is not None:
            _ensure_dir(self.dir_tables)

    def _paths(self, name: str):
        base = os.path.join(self.dir_tables, name)
        return base + ".json", base + ".npz"

    def put(self, name: str, table: Table):
        """
        Store `table` under `name`. Returns the written paths (None when memory-only).
        """
        if not isinstance(table, Table):
            raise TypeError(f"only Table instances can be cached, got {type(table).__name__}")
        _check_name(name)
        self._memory[name] = table
        if self.dir_tables is None:
            return None

        json_path, npz_path = self._paths(name)
        payload = {
            "name": name,
            "order": table.order,
            "commutative": table.is_commutative(),
            "identity": repr(table.find_identity()),
            "fingerprint": fingerprint_table(table),
            "created_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            "npz_path": npz_path,
            "schema": CACHE_SCHEMA,
        }
        with open(json_path, "w") as f:
            json.dump(payload, f, indent=2)

        # element-wise so tuple elements are not broadcast into extra dimensions
        elements = np.empty(table.order, dtype=object)
        for i, x in enumerate(table.elements):
            elements[i] = x
        np.savez_compressed(npz_path, indices=table.indices, elements=elements)
        logger.debug("cached table %r at %s", name, npz_path)
        return {"json": json_path, "npz": npz_path}

    def get(self, name: str) -> Table | None:
        """the table stored under `name`, or None on a miss or an unreadable entry"""
        _check_name(name)
        if name in self._memory:
            return self._memory[name]
        if self.dir_tables is None:
            return None

        json_path, npz_path = self._paths(name)
        if not (os.path.exists(npz_path) and os.path.exists(json_path)):
            return None
        try:
            with open(json_path, "r") as f:
                summary = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("cannot read cached summary %s: %s", json_path, exc)
            return None
        if not isinstance(summary, dict) or "fingerprint" not in summary:
            logger.warning("cached summary %s has no fingerprint, ignoring it", json_path)
            return None
        if summary.get("schema") != CACHE_SCHEMA:
            logger.warning("ignoring cached table %r with schema %r", name, summary.get("schema"))
            return None

        try:
            with np.load(npz_path, allow_pickle=True) as payload:
                table = Table.from_indices(payload["elements"].tolist(), payload["indices"])
        except (OSError, ValueError, KeyError, EOFError, zipfile.BadZipFile, pickle.UnpicklingError) as exc:
            logger.warning("cannot read cached table %s: %s", npz_path, exc)
            return None
        if fingerprint_table(table) != summary["fingerprint"]:
            raise CayleyError(f"cached table {name!r} does not match its recorded fingerprint")
        self._memory[name] = table
        return table

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def names(self) -> list[str]:
        """cached names; on disk only entries with both the npz and json file count"""
        found = set(self._memory)
        if self.dir_tables is not None:
            entries = set(os.listdir(self.dir_tables))
            for entry in entries:
                if entry.endswith(".npz") and entry[:-4] + ".json" in entries:
                    found.add(entry[:-4])
        return sorted(found)
