from io import StringIO

import numpy as np
import pytest
from scipy.constants import Avogadro

from bngexport.core import Model, ElemMolType, Compartment, RxnRule
from bngexport.generator.bng import BngGenerator, export_to_bngl
from bngexport.testing import cell_model, export_streams, section_lines
from bngexport.util import parameter_values


def test_molecule_types():
    params, mol_types, _, _, _ = export_streams(cell_model())
    assert mol_types == ('begin molecule types\n'
                         '  L(r)\n'
                         '  R(l,s~U~P)\n'
                         '  A()\n'
                         'end molecule types\n')
    lines = params.splitlines()
    assert '  MCELL_DIFFUSION_CONSTANT_3D_L 1e-06' in lines
    assert '  MCELL_DIFFUSION_CONSTANT_2D_R 1e-08' in lines
    assert '  MCELL_DIFFUSION_CONSTANT_3D_A 2e-06' in lines
    assert 'absorb' not in params


def test_molecule_types_skip_superclasses():
    model = Model('superclasses')
    for name in ('ALL_MOLECULES', 'ALL_VOLUME_MOLECULES'):
        model.add_component(ElemMolType(name))
    model.add_component(ElemMolType('ALL_SURFACE_MOLECULES', surface=True))
    model.add_component(ElemMolType('B', diffusion_constant=0))
    params, mol_types, _, _, _ = export_streams(model)
    assert section_lines(mol_types) == ['B()']
    assert 'ALL_' not in params
    assert '  MCELL_DIFFUSION_CONSTANT_3D_B 0.0\n' in params


def test_reaction_rules():
    _, _, _, rules, _ = export_streams(cell_model())
    assert rules == (
        'begin reaction rules\n'
        '  L(r)@EC + R(l)@PM -> L(r!1)@EC.R(l!1)@PM k0\n'
        '  L(r!1)@EC.R(l!1)@PM -> L(r)@EC + R(l)@PM k1\n'
        '  R(s~P)@PM + R(s~P)@PM -> R(s~U)@PM + R(s~U)@PM k2\n'
        '  A@CP -> 0 k3\n'
        '  A@CP + A@CP -> A@CP + L(r)@CP k4\n'
        'end reaction rules\n')


def test_rate_parameters():
    params, _, _, _, _ = export_streams(cell_model())
    lines = params.splitlines()
    # bimolecular volume-surface
    assert '  k0 100000000.0 / mcell_to_bng_vol_conv * vol_rxn' in lines
    # unimolecular rates are used verbatim
    assert '  k1 0.1' in lines
    assert '  k3 0.5' in lines
    assert '  k2 3.0 / mcell_to_bng_surf_conv * surf_rxn' in lines
    # bimolecular volume
    assert '  k4 2000000.0 / mcell_to_bng_vol_conv * vol_rxn' in lines
    # the reactive surface rule keeps its rate, unscaled
    assert '  k5 1000.0' in lines


def test_rate_parameter_values():
    params, _, _, _, _ = export_streams(cell_model())
    values = parameter_values(params)
    assert np.isclose(values['k0'], 1e8 / (Avogadro * 1e-15))
    assert np.isclose(values['k1'], 0.1)
    assert np.isclose(values['k2'], 3.0 / 0.01)


def test_rate_parameter_values_nfsim():
    params, _, _, _, _ = export_streams(cell_model(), mode='nfsim',
                                        volume=2.5, area=4.0)
    values = parameter_values(params)
    assert np.isclose(values['rate_conv_volume'], 2.5e-15)
    assert np.isclose(values['k0'], 1e8 / (Avogadro * 2.5e-15))
    assert np.isclose(values['k2'], 3.0 / (4.0 * 0.01 * 1e-15))
    assert values['k3'] == 0.5


def test_unimolecular_rate_verbatim():
    model = Model('unimol')
    model.add_component(ElemMolType('A'))
    for i, rate in enumerate([0.1, 1e-20, 12345.678, np.float64(2.5), 7]):
        model.add_component(RxnRule('r%d' % i, ['A'], [], rate))
    params, _, _, _, err_msg = export_streams(model)
    assert err_msg == ''
    lines = params.splitlines()
    for expected in ('  k0 0.1', '  k1 1e-20', '  k2 12345.678', '  k3 2.5',
                     '  k4 7.0'):
        assert expected in lines


def test_reactive_surface_rule_skipped():
    _, _, _, rules, err_msg = export_streams(cell_model())
    assert 'absorb' not in rules
    assert err_msg == ('Export of reactions with reactive surfaces to BNGL '
                       'is not supported, error for A + absorb -> 0.')


def test_errors_accumulate():
    model = Model('errors')
    model.add_component(ElemMolType('A'))
    model.add_component(ElemMolType('wall', reactive_surface=True))
    model.add_component(RxnRule('absorb', ['A', 'wall'], [], 1.0))
    model.add_component(RxnRule('trimol', ['A', 'A', 'A'], ['A'], 1.0))
    model.add_component(RxnRule('decay', ['A'], [], 1.0))
    model.add_component(RxnRule('unknown', ['B'], [], 1.0))
    params, _, _, rules, err_msg = export_streams(model)
    errors = err_msg.split('\n')
    assert len(errors) == 3
    assert 'A + wall -> 0' in errors[0]
    assert 'internal error, unexpected reaction type' in errors[1]
    assert 'A + A + A -> A' in errors[1]
    assert 'B -> 0' in errors[2]
    # the valid rule keeps its position based name
    assert section_lines(rules) == ['A -> 0 k2']
    assert '  k2 1.0\n' in params
    # only the reactive surface rule of the skipped ones has a rate
    assert '  k0 1.0\n' in params
    assert '  k1 ' not in params
    assert '  k3 ' not in params


def test_compartments():
    params, _, compartments, _, _ = export_streams(cell_model())
    assert compartments == ('begin compartments\n'
                            '  EC 3 vol_EC\n'
                            '  PM 2 area_PM * thickness EC\n'
                            '  CP 3 vol_CP PM\n'
                            'end compartments\n')
    lines = params.splitlines()
    assert '  vol_EC 1000.0 # um^3' in lines
    assert '  area_PM 6.0 # um^2' in lines
    assert '  vol_CP 1.0 # um^3' in lines
    assert 'default_compartment' not in params


def test_cell_membrane_example():
    model = Model('cell')
    cell = model.add_component(Compartment('Cell', dimension=3, size=10))
    model.add_component(Compartment('Membrane', parent=cell, dimension=2,
                                    size=5))
    params, _, compartments, _, _ = export_streams(model)
    declarations = section_lines(compartments)
    assert declarations == ['Cell 3 vol_Cell',
                            'Membrane 2 area_Membrane * thickness Cell']
    values = parameter_values(params)
    assert values['vol_Cell'] == 10
    assert values['area_Membrane'] == 5


def test_compartments_added_out_of_order():
    # children are listed by the parent, so a root added late still comes
    # before them
    model = Model('late_root')
    a = model.add_component(Compartment('A', size=1.0))
    model.add_component(Compartment('Z', size=1.0))
    model.add_component(Compartment('A_mem', parent=a, dimension=2,
                                    size=1.0))
    _, _, compartments, _, _ = export_streams(model)
    assert [l.split()[0] for l in section_lines(compartments)] == \
        ['A', 'A_mem', 'Z']


def test_compartment_reserved_size_name_reported():
    model = Model('renamed')
    cell = model.add_component(Compartment('cell', size=10.0))
    model.add_component(Compartment('cell_mem', parent=cell, dimension=2,
                                    size=2.0))
    model.add_component(Compartment('other', size=3.0))
    cell.name = 'rxn'
    params, _, compartments, _, err_msg = export_streams(model)
    errors = err_msg.split('\n')
    assert len(errors) == 2
    assert 'compartment rxn' in errors[0]
    assert 'vol_rxn is a reserved name' in errors[0]
    assert 'compartment cell_mem' in errors[1]
    assert section_lines(compartments) == ['other 3 vol_other']
    # the reaction switch is not overwritten
    assert parameter_values(params)['vol_rxn'] == 1
    assert 'area_cell_mem' not in params


def test_parameters_section_evaluates():
    # every name used in the parameters stream is defined before its use
    for kwargs in ({}, {'mode': 'nfsim', 'volume': 0.5, 'area': 2.0}):
        params, _, _, _, _ = export_streams(cell_model(), **kwargs)
        values = parameter_values(params)
        assert list(values)[0] == 'thickness'


def test_export_deterministic():
    model = cell_model()
    for kwargs in ({}, {'mode': 'nfsim', 'volume': 2.5, 'area': 4.0}):
        assert export_streams(model, **kwargs) == \
            export_streams(model, **kwargs)
    assert export_streams(cell_model()) == export_streams(cell_model())


def test_export_does_not_modify_model():
    model = cell_model()
    before = [repr(c) for c in model.all_components()]
    export_streams(model)
    assert [repr(c) for c in model.all_components()] == before


def test_section_order_in_parameters():
    params, _, _, _, _ = export_streams(cell_model())
    positions = [params.index(marker) for marker in (
        '# unit conversions', '# diffusion constants', '# reaction rates',
        '# compartment sizes')]
    assert positions == sorted(positions)


def test_generator_invalid_mode():
    with pytest.raises(ValueError):
        BngGenerator(cell_model(), mode='nfsim')
    with pytest.raises(ValueError):
        export_to_bngl(cell_model(), *[StringIO() for _ in range(4)],
                       mode='ode')


def test_empty_model():
    params, mol_types, compartments, rules, err_msg = \
        export_streams(Model('empty'))
    assert err_msg == ''
    assert mol_types == 'begin molecule types\nend molecule types\n'
    assert compartments == 'begin compartments\nend compartments\n'
    assert rules == 'begin reaction rules\nend reaction rules\n'
