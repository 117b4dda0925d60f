__version__ = '1.0.0'

from bngexport.core import *

__all__ = ['Model', 'ElemMolType', 'Compartment', 'RxnRule', 'RxnType',
           'ComponentSet', 'classify_rxn_rule']
