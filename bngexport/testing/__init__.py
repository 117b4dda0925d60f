from io import StringIO

from bngexport.core import Model, ElemMolType, Compartment, RxnRule
from bngexport.generator.bng import export_to_bngl


def cell_model(name='cell'):
    """Build a small model: a cell with a plasma membrane and cytosol

    Molecule types ``L`` (volume), ``R`` (surface) and ``A`` (volume) with a
    reactive surface class ``absorb``, plus one rule per reaction class.
    """
    model = Model(name)
    add = model.add_component
    ec = add(Compartment('EC', dimension=3, size=1000.0))
    pm = add(Compartment('PM', parent=ec, dimension=2, size=6.0))
    add(Compartment('CP', parent=pm, dimension=3, size=1.0))

    add(ElemMolType('L', ['r'], diffusion_constant=1e-6))
    add(ElemMolType('R', ['l', 's'], {'s': ['U', 'P']},
                    diffusion_constant=1e-8, surface=True))
    add(ElemMolType('A', diffusion_constant=2e-6))
    add(ElemMolType('absorb', reactive_surface=True))

    add(RxnRule('bind', ['L(r)@EC', 'R(l)@PM'], ['L(r!1)@EC.R(l!1)@PM'],
                1e8))
    add(RxnRule('unbind', ['L(r!1)@EC.R(l!1)@PM'], ['L(r)@EC', 'R(l)@PM'],
                0.1))
    add(RxnRule('dimerize', ['R(s~P)@PM', 'R(s~P)@PM'], ['R(s~U)@PM',
                                                         'R(s~U)@PM'], 3.0))
    add(RxnRule('degrade', ['A@CP'], [], 0.5))
    add(RxnRule('bind_A', ['A@CP', 'A@CP'], ['A@CP', 'L(r)@CP'], 2e6))
    add(RxnRule('absorb_A', ['A', 'absorb'], [], 1e3))
    return model


def export_streams(model, **kwargs):
    """Run export_to_bngl into fresh StringIO objects

    Returns
    -------
    tuple
        (parameters, molecule types, compartments, reaction rules, errors) as
        strings.
    """
    streams = [StringIO() for _ in range(4)]
    err_msg = export_to_bngl(model, *streams, **kwargs)
    return tuple(s.getvalue() for s in streams) + (err_msg, )


def section_lines(text):
    """Body lines of a section, without markers and indentation"""
    return [line.strip() for line in text.splitlines()
            if line.strip() and not line.startswith('begin ') and
            not line.startswith('end ')]


def check_parents_first(model, compartment_names):
    """Assert every compartment comes after all of its ancestors"""
    position = {name: i for i, name in enumerate(compartment_names)}
    for name in compartment_names:
        comp = model.compartments[name]
        parent = comp.parent
        while parent is not None:
            if parent.name in position:
                assert position[parent.name] < position[name], \
                    "Compartment %s appears before its ancestor %s" % (
                        name, parent.name)
            parent = parent.parent
