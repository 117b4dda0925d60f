"""First-order decay of a single volume species, without compartments."""

from bngexport import Model, ElemMolType, RxnRule

model = Model('simple_decay')

model.add_component(ElemMolType('A', diffusion_constant=1e-6))
model.add_component(RxnRule('decay', ['A'], [], 0.1))
