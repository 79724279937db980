class Tag:
    __slots__ = ("attrs", "kind", "name", "self_closing")

    START = 0
    END = 1

    def __init__(self, kind, name, attrs=None, self_closing=False):
        self.kind = kind
        self.name = name
        # flat list [name1, value1, name2, value2, ...]
        self.attrs = attrs if attrs is not None else []
        self.self_closing = bool(self_closing)

    def attr_pairs(self):
        attrs = self.attrs
        return [(attrs[index], attrs[index + 1]) for index in range(0, len(attrs), 2)]

    def __repr__(self):
        parts = [f"{name}={value!r}" for name, value in self.attr_pairs()]
        attrs = " ".join(parts)
        closing = " /" if self.self_closing else ""
        kind_str = "start" if self.kind == self.START else "end"
        return f"<{kind_str}:{self.name}{closing} {attrs}>"


class CharacterTokens:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"CharacterTokens({self.data!r})"


class CommentToken:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"CommentToken({self.data!r})"


class DoctypeToken:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"DoctypeToken({self.data!r})"


class EOFToken:
    __slots__ = ()

    def __repr__(self):
        return "EOFToken()"


class ParseError:
    """Represents a tokenizer error with location information."""

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is not None and self.column is not None:
            if self.message != self.code:
                return f"({self.line},{self.column}): {self.code} - {self.message}"
            return f"({self.line},{self.column}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.line == other.line and self.column == other.column

    __hash__ = None  # Unhashable since we define __eq__
