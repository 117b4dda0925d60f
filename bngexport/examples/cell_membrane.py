"""Ligand binding to a membrane receptor in a cell with a nucleus.

Compartments: extracellular space EC, plasma membrane PM, cytoplasm CP,
nuclear membrane NM and nucleoplasm NU, nested in that order.
"""

from bngexport import Model, ElemMolType, Compartment, RxnRule

model = Model('cell_membrane')

EC = model.add_component(Compartment('EC', dimension=3, size=8.0))
PM = model.add_component(Compartment('PM', parent=EC, dimension=2, size=6.0))
CP = model.add_component(Compartment('CP', parent=PM, dimension=3, size=1.0))
NM = model.add_component(Compartment('NM', parent=CP, dimension=2, size=1.5))
NU = model.add_component(Compartment('NU', parent=NM, dimension=3, size=0.1))

model.add_component(ElemMolType('L', ['r'], diffusion_constant=1e-6))
model.add_component(ElemMolType('R', ['l', 'y'], {'y': ['U', 'P']},
                                diffusion_constant=1e-8, surface=True))
model.add_component(ElemMolType('K', ['r'], diffusion_constant=5e-7))
model.add_component(ElemMolType('TF', ['s'], {'s': ['U', 'P']},
                                diffusion_constant=5e-7))

# Rate constants: /M/s for bimolecular, /s for unimolecular rules
model.add_component(RxnRule('bind_L_R', ['L(r)@EC', 'R(l)@PM'],
                            ['L(r!1)@EC.R(l!1)@PM'], 3e7))
model.add_component(RxnRule('unbind_L_R', ['L(r!1)@EC.R(l!1)@PM'],
                            ['L(r)@EC', 'R(l)@PM'], 0.06))
model.add_component(RxnRule('phos_R', ['L(r!1)@EC.R(l!1,y~U)@PM'],
                            ['L(r!1)@EC.R(l!1,y~P)@PM'], 0.5))
model.add_component(RxnRule('bind_K_R', ['K(r)@CP', 'R(y~P)@PM'],
                            ['K(r!1)@CP.R(y~P!1)@PM'], 1e6))
model.add_component(RxnRule('phos_TF', ['TF(s~U)@NU'], ['TF(s~P)@NU'], 0.01))
