"""An in-memory tree of partly serialized binary Ion.

Binary values are prefixed by their lengths, which are not known until the
contents are written. Values are therefore gathered in a tree of nodes and
emitted once every length is fixed.
"""

from ionbin.bits import encode_tag, tag_len


class Atom:
    """A fully serialized run of bytes."""

    __slots__ = ("data",)

    def __init__(self, data):
        self.data = bytes(data)

    def __len__(self):
        return len(self.data)

    def emit_to(self, out):
        """Write the bytes to ``out``."""
        out.write(self.data)


class Datagram:
    """A sequence of nodes emitted one after another."""

    def __init__(self):
        self.children = []
        self.content_length = 0

    def append(self, node):
        """Add a node to the end of the sequence."""
        self.content_length += len(node)
        self.children.append(node)

    def __len__(self):
        return self.content_length

    def emit_to(self, out):
        """Write every child to ``out`` in order."""
        for child in self.children:
            child.emit_to(out)


class Container(Datagram):
    """A datagram preceded by a type code and length tag."""

    def __init__(self, code):
        super().__init__()
        self.code = code

    def __len__(self):
        return self.content_length + tag_len(self.content_length)

    def emit_to(self, out):
        """Write the tag and then the contents to ``out``."""
        out.write(encode_tag(self.code, self.content_length))
        super().emit_to(out)