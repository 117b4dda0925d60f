import collections
import re

import numpy
import sympy

__all__ = ['format_real', 'parameter_values', 'UndefinedParameterError']

# the lookbehind skips the exponent of literals like 1e-15
_IDENTIFIER_REGEX = re.compile(r"(?<![0-9.])[_a-z][_a-z0-9]*", re.IGNORECASE)


def format_real(value):
    """
    Render a real number for BNGL output

    Every number written by the exporter goes through here, so the same value
    always renders to the same text. The shortest string that round-trips to
    the same double is used, e.g. ``3.0``, ``0.01``, ``1e-15``.

    Parameters
    ----------
    value : float, int or numpy scalar

    Returns
    -------
    string
    """
    if isinstance(value, numpy.generic):
        value = value.item()
    return repr(float(value))


def parameter_values(parameters_text):
    """
    Evaluate a BNGL parameters section

    Lines are ``name expression [# comment]``. Blank lines, comment lines and
    ``begin``/``end`` markers are ignored. Expressions are evaluated in order
    with sympy, so each one may only reference parameters defined above it.

    Parameters
    ----------
    parameters_text : string

    Returns
    -------
    collections.OrderedDict
        Parameter name => value (float), in definition order.

    Examples
    --------
    >>> parameter_values('a 2\\nb a * 1.5 # scaled')['b']
    3.0
    """
    values = collections.OrderedDict()
    for line_no, line in enumerate(parameters_text.splitlines(), 1):
        line = line.split('#', 1)[0].strip()
        if not line or line.startswith('begin ') or line.startswith('end '):
            continue
        try:
            name, expr_text = line.split(None, 1)
        except ValueError:
            raise ValueError('Line %d is not a parameter definition: %s' %
                             (line_no, line))
        # Use plain symbols so names like "E" or "beta" are not taken as
        # sympy builtins
        local_dict = {ident: sympy.Symbol(ident) for ident in
                      _IDENTIFIER_REGEX.findall(expr_text)}
        expr = sympy.sympify(expr_text, locals=local_dict)
        undefined = [s.name for s in expr.free_symbols
                     if s.name not in values]
        if undefined:
            raise UndefinedParameterError(name, sorted(undefined))
        expr = expr.subs({sympy.Symbol(n): values[n]
                          for n in (s.name for s in expr.free_symbols)})
        values[name] = float(expr.evalf())
    return values


class UndefinedParameterError(ValueError):
    """A parameter expression references a name defined nowhere above it."""
    def __init__(self, name, undefined):
        ValueError.__init__(self, 'Parameter %s references undefined '
                                  'name(s): %s' % (name, ', '.join(undefined)))
