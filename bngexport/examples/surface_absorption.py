"""Volume and surface molecules next to an absorbing surface.

The absorption rule uses a reactive surface and cannot be written as BNGL, so
exporting this model leaves it out and reports an error for it.
"""

from bngexport import Model, ElemMolType, Compartment, RxnRule

model = Model('surface_absorption')

box = model.add_component(Compartment('box', dimension=3, size=0.125))
wall = model.add_component(Compartment('wall', parent=box, dimension=2,
                                       size=1.5))

model.add_component(ElemMolType('a', diffusion_constant=1e-6))
model.add_component(ElemMolType('b', diffusion_constant=1e-8, surface=True))
model.add_component(ElemMolType('sink', reactive_surface=True))
model.add_component(ElemMolType('ALL_VOLUME_MOLECULES'))

model.add_component(RxnRule('adsorb', ['a@box', 'b@wall'], ['b@wall'], 1e8))
model.add_component(RxnRule('dimer', ['b@wall', 'b@wall'], ['b@wall'], 2.5))
model.add_component(RxnRule('absorb', ['a', 'sink'], [], 1e4))
