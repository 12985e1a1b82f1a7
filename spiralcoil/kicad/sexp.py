import re
import functools
from typing import Any


class SexpError(ValueError):
    """ Low-level error parsing S-Expression format """
    pass


class FormatError(ValueError):
    """ Semantic error in S-Expression structure """
    pass


class AtomType(type):
    def __getattr__(cls, key):
        # Protocol lookups such as hasattr(Atom, '__map__') must not produce atoms.
        if key.startswith('__'):
            raise AttributeError(key)
        return cls(key)


@functools.total_ordering
class Atom(metaclass=AtomType):
    def __init__(self, obj=''):
        if isinstance(obj, str):
            self.value = obj
        elif isinstance(obj, Atom):
            self.value = obj.value
        else:
            raise TypeError(f'Atom argument must be str, not {type(obj)}')

    def __str__(self):
        return self.value

    def __repr__(self):
        return f'@{self.value}'

    def __hash__(self):
        return hash(self.value)

    def __eq__(self, other):
        if not isinstance(other, (Atom, str)):
            return self.value == other
        return self.value == str(other)

    def __lt__(self, other):
        if not isinstance(other, (Atom, str)):
            raise TypeError(f'Cannot compare Atom and {type(other)}')
        return self.value < str(other)

    def __gt__(self, other):
        if not isinstance(other, (Atom, str)):
            raise TypeError(f'Cannot compare Atom and {type(other)}')
        return self.value > str(other)


# Numbers must be followed by whitespace or a closing paren, everything else that is not quoted is a bare atom. This
# way, bare UUIDs such as 4efbfedb-0d6a-... that start with a digit still parse as atoms.
term_regex = r"""(?mx)
    \s*(?:
        "((?:\\\\|\\"|[^"])*)"|
        (\()|
        (\))|
        ([+-]?\d+\.\d+(?=[\s\)]))|
        (\-?\d+(?=[\s\)]))|
        ([^"\s()][^"\s)]*)
       )"""


def parse_sexp(sexp: str) -> Any:
    re_iter = re.finditer(term_regex, sexp)
    rv = list(_parse_sexp_internal(re_iter))

    for leftover in re_iter:
        quoted_str, lparen, rparen, *rest = leftover.groups()
        if quoted_str or lparen or any(rest):
            raise SexpError(f'Leftover garbage after end of expression at position {leftover.start()}')  # noqa: E501

        elif rparen:
            raise SexpError(f'Unbalanced closing parenthesis at position {leftover.start()}')

    if len(rv) == 0:
        raise SexpError('No or empty expression')

    if len(rv) > 1:
        raise SexpError('Missing initial opening parenthesis')

    return rv[0]


def _parse_sexp_internal(re_iter) -> Any:
    for match in re_iter:
        quoted_str, lparen, rparen, float_num, integer_num, bare_str = match.groups()

        if lparen:
            yield list(_parse_sexp_internal(re_iter))
        elif rparen:
            break
        elif bare_str is not None:
            yield Atom(bare_str)
        elif quoted_str is not None:
            yield quoted_str.replace('\\"', '"')
        elif float_num:
            yield float(float_num)
        elif integer_num:
            yield int(integer_num)


def build_sexp(exp, indent='  ', oneline=False, precision=None) -> str:
    """ Serialize a nested list of atoms, strings and numbers.

    With ``oneline``, the whole expression is written on a single line. With ``precision``, floats are written with
    exactly that many decimal places instead of KiCad's usual stripped 6-digit notation.
    """
    # Special case for multi-values
    if isinstance(exp, (list, tuple)):
        if oneline:
            return '(' + ' '.join(build_sexp(elem, oneline=True, precision=precision) for elem in exp) + ')'

        joined = '('
        for i, elem in enumerate(exp):
            if 1 <= i <= 5 and len(joined) < 120 and not isinstance(elem, (list, tuple)):
                joined += ' '
            elif i >= 1:
                joined += '\n' + indent
            joined += build_sexp(elem, indent=f'{indent}  ', precision=precision)
        return joined + ')'

    if exp == '':
        return '""'

    if isinstance(exp, str):
        exp = exp.replace('"', r'\"')
        return f'"{exp}"'

    if isinstance(exp, float):
        exp += 0.0 # -0.0 -> 0.0
        if precision is not None:
            val = f'{exp:.{precision}f}'
            if val.startswith('-') and float(val) == 0:
                val = val[1:]
            return val

        # python whyyyy
        val = f'{exp:.6f}'
        val = val.rstrip('0')
        if val[-1] == '.':
            val += '0'
        return val
    else:
        return str(exp)
