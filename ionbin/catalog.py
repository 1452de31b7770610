"""An in-memory collection of shared symbol tables."""


class Catalog:
    """Finds shared symbol tables by name and version.

    A table is any object with ``name`` and ``version`` attributes.
    """

    def __init__(self, *tables):
        self._tables = {}
        self._latest = {}
        for table in tables:
            self.add(table)

    def add(self, table):
        """Add a shared symbol table, replacing one with the same name and version."""
        self._tables[(table.name, table.version)] = table
        current = self._latest.get(table.name)
        if current is None or table.version > current.version:
            self._latest[table.name] = table

    def find_exact(self, name, version):
        """Return the table with this name and version, or None."""
        return self._tables.get((name, version))

    def find_latest(self, name):
        """Return the table with this name and the largest version, or None."""
        return self._latest.get(name)

    def __len__(self):
        return len(self._tables)

    def __iter__(self):
        return iter(self._tables.values())