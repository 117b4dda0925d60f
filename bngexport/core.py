import re
import weakref
from collections.abc import Iterable, Mapping, Sequence, Set
from enum import Enum

from bngexport import names


class Component(object):

    """
    The base class for all the named things contained within a model.

    Parameters
    ----------
    name : string
        Name of the component. Must be unique within its container in the
        model.

    Attributes
    ----------
    name : string
        Name of the component.
    id : int
        Index of the component within its container, set when the component
        is added to a model.
    model : weakref(Model)
        Containing model.

    """
    _VARIABLE_NAME_REGEX = re.compile(r'[_a-z][_a-z0-9]*\Z', re.IGNORECASE)
    _STATE_REGEX = re.compile(r'[_a-z0-9]+\Z', re.IGNORECASE)

    def __init__(self, name):
        if not isinstance(name, str) or \
                not self._VARIABLE_NAME_REGEX.match(name):
            raise InvalidComponentNameError(name)
        self.name = name
        self.id = None     # to be set in Model.add_component
        self.model = None  # to be set in Model.add_component

    def __getstate__(self):
        # clear the weakref to parent model (restored in Model.__setstate__)
        state = self.__dict__.copy()
        state.pop('model', None)
        return state


class ElemMolType(Component):
    """
    Model component representing an elementary molecule type.

    Parameters
    ----------
    sites : list of strings, optional
        Names of the sites (BNGL components).
    site_states : dict of string => list of strings, optional
        Allowable states for sites. Sites which only take part in bond
        formation and never take on a state may be omitted.
    diffusion_constant : float, optional
        Diffusion constant, in cm^2/s.
    surface : bool, optional
        True for molecules that live on a 2-D surface, False (the default) for
        volume molecules.
    reactive_surface : bool, optional
        True for the surface classes that define reactive surface properties.
        These are not molecules at all and have neither of the volume or
        surface flags set.

    Attributes
    ----------
    Identical to Parameters (see above).

    """
    def __init__(self, name, sites=None, site_states=None,
                 diffusion_constant=0.0, surface=False,
                 reactive_surface=False):
        if sites is None:
            sites = []
        if site_states is None:
            site_states = {}

        # ensure sites is some kind of list (presumably of strings) but not a
        # string itself
        if not isinstance(sites, Iterable) or isinstance(sites, str):
            raise ValueError("sites must be a list of strings")

        sites_seen = set()
        for site in sites:
            if not self._VARIABLE_NAME_REGEX.match(site):
                raise ValueError('Invalid site name: ' + str(site))
            if site in sites_seen:
                raise DuplicateSiteError(
                    'Duplicate site %s in molecule type %s' % (site, name))
            sites_seen.add(site)

        unknown_sites = [site for site in site_states
                         if site not in sites_seen]
        if unknown_sites:
            raise UnknownSiteError("Unknown sites in site_states: " +
                                   str(unknown_sites))
        invalid_sites = [site for (site, states) in site_states.items()
                         if not all([isinstance(s, str)
                                     and self._STATE_REGEX.match(s)
                                     for s in states])]
        if invalid_sites:
            raise ValueError("Invalid or non-string state values in "
                             "site_states for sites: " + str(invalid_sites))

        if surface and reactive_surface:
            raise ValueError("A reactive surface cannot also be a surface "
                             "molecule")

        self.sites = list(sites)
        self.site_states = site_states
        self.diffusion_constant = diffusion_constant
        self._surface = bool(surface)
        self._reactive_surface = bool(reactive_surface)
        Component.__init__(self, name)

    @property
    def is_reactive_surface(self):
        return self._reactive_surface

    @property
    def is_surf(self):
        return self._surface

    @property
    def is_vol(self):
        return not self._surface and not self._reactive_surface

    @property
    def is_species_superclass(self):
        return self.name in names.SPECIES_SUPERCLASSES

    def to_str(self):
        """Render as a BNGL molecule type declaration, e.g. ``A(b,s~U~P)``"""
        site_code = ','.join([format_site(self, s) for s in self.sites])
        return '%s(%s)' % (self.name, site_code)

    def __repr__(self):
        value = '%s(%s' % (self.__class__.__name__, repr(self.name))
        if self.sites:
            value += ', %s' % repr(self.sites)
        if self.site_states:
            value += ', %s' % repr(self.site_states)
        value += ', diffusion_constant=%s' % repr(self.diffusion_constant)
        if self.is_surf:
            value += ', surface=True'
        if self.is_reactive_surface:
            value += ', reactive_surface=True'
        value += ')'
        return value


def format_site(mol_type, site):
    ret = site
    if site in mol_type.site_states:
        for state in mol_type.site_states[site]:
            ret += '~' + state
    return ret


class Compartment(Component):

    """
    Model component representing a bounded reaction volume or surface.

    Parameters
    ----------
    parent : Compartment, optional
        Compartment which contains this one. If not specified, this will be an
        outermost compartment and its parent will be set to None. The parent
        must already be part of the model when this compartment is added.
    dimension : integer, optional
        The number of spatial dimensions in the compartment, either 2 (i.e. a
        membrane) or 3 (a volume).
    size : float, optional
        Volume in um^3 (3-D) or area in um^2 (2-D). Only the default
        compartment may omit it.

    Attributes
    ----------
    parent_id : int or None
        Id of the parent compartment.
    children_ids : list of int
        Ids of the compartments directly contained in this one, in the order
        they were added to the model.

    Notes
    -----
    The compartments of a model must form a forest via their `parent`
    attributes. A volume compartment usually has membranes as its children and
    a membrane encloses a single volume compartment.

    Examples
    --------
    Compartment('CP', parent=PM, dimension=3, size=0.5)

    """

    def __init__(self, name, parent=None, dimension=3, size=None):
        if parent is not None and not isinstance(parent, Compartment):
            raise ValueError("parent must be a predefined Compartment or None")
        if dimension not in (2, 3):
            raise ValueError("dimension of compartment %s must be 2 or 3, "
                             "got %s" % (name, repr(dimension)))
        if size is None and name != names.DEFAULT_COMPARTMENT_NAME:
            raise ValueError("size of compartment %s must be given" % name)
        self.parent = parent
        self.dimension = dimension
        self.size = size
        self.parent_id = None
        self.children_ids = []
        Component.__init__(self, name)

    @property
    def is_3d(self):
        return self.dimension == 3

    @property
    def size_param_name(self):
        """Name of the BNGL parameter holding the volume or area"""
        if self.is_3d:
            return names.PREFIX_VOLUME + self.name
        return names.PREFIX_AREA + self.name

    def get_volume_or_area(self):
        return self.size

    def __repr__(self):
        return '%s(name=%s, parent=%s, dimension=%s, size=%s)' % (
            self.__class__.__name__,
            repr(self.name),
            'None' if self.parent is None else self.parent.name,
            repr(self.dimension),
            repr(self.size)
        )


class RxnType(Enum):
    """Molecularity and locality class of a reaction rule"""
    UNIMOL = 'unimolecular'
    BIMOL_VOL = 'bimolecular volume'
    BIMOL_VOL_SURF = 'bimolecular volume-surface'
    BIMOL_SURF_SURF = 'bimolecular surface-surface'
    REACTIVE_SURFACE = 'reactive surface'


class RxnRule(Component):

    """
    Model component representing a reaction rule.

    Parameters
    ----------
    reactants : list of strings
        BNGL complex patterns consumed by the rule, e.g.
        ``['A(b)', 'B(a)@PM']``.
    products : list of strings
        BNGL complex patterns produced by the rule. An empty list means the
        reactants are degraded.
    rate_constant : float
        Base rate constant in MCell units: 1/s for unimolecular rules,
        1/(M*s) for bimolecular volume rules and um^2/(N*s) for
        surface-surface rules.

    Notes
    -----
    Only irreversible rules are supported, a reversible reaction is given as
    two rules.

    """

    def __init__(self, name, reactants, products, rate_constant):
        if isinstance(reactants, str) or isinstance(products, str):
            raise ValueError("reactants and products must be lists of "
                             "complex patterns")
        self.reactants = list(reactants)
        self.products = list(products)
        self.rate_constant = rate_constant
        Component.__init__(self, name)

    def to_str(self):
        """Render the rule body as BNGL, without a label or rate"""
        return '%s -> %s' % (format_complexes(self.reactants),
                             format_complexes(self.products))

    def __repr__(self):
        return '%s(%s, %s, %s, %s)' % (
            self.__class__.__name__, repr(self.name), repr(self.reactants),
            repr(self.products), repr(self.rate_constant))


def format_complexes(complexes):
    if not complexes:
        return '0'
    return ' + '.join(complexes)


# Compartment prefix (@PM:A(b).B(a)) and suffix (A(b)@PM) of a molecule
_COMPLEX_COMPARTMENT_PREFIX_REGEX = re.compile(r'^@[_a-z0-9]+::?',
                                               re.IGNORECASE)
_MOLECULE_NAME_REGEX = re.compile(r'\s*([_a-z][_a-z0-9]*)\s*(\(|@|\Z)',
                                  re.IGNORECASE)


def complex_mol_type_names(complex_pattern):
    """
    Names of the elementary molecule types in a BNGL complex pattern

    >>> complex_mol_type_names('@PM:A(b!1).B(a!1,s~P)')
    ['A', 'B']
    """
    cplx = _COMPLEX_COMPARTMENT_PREFIX_REGEX.sub('', complex_pattern.strip())
    mol_names = []
    for mol in cplx.split('.'):
        match = _MOLECULE_NAME_REGEX.match(mol)
        if match is None:
            raise InvalidComplexPatternError(complex_pattern)
        mol_names.append(match.group(1))
    return mol_names


def _reactant_kind(reactant, model):
    # 'reactive', 'surf' or 'vol'; None when a molecule type is not known
    try:
        mol_names = complex_mol_type_names(reactant)
    except InvalidComplexPatternError:
        return None
    kinds = set()
    for mol_name in mol_names:
        mt = model.elem_mol_types.get(mol_name)
        if mt is not None:
            if mt.is_reactive_surface:
                kinds.add('reactive')
            elif mt.is_surf:
                kinds.add('surf')
            else:
                kinds.add('vol')
        elif mol_name == names.ALL_SURFACE_MOLECULES:
            kinds.add('surf')
        elif mol_name in names.SPECIES_SUPERCLASSES:
            kinds.add('vol')
        else:
            kinds.add(None)
    if 'reactive' in kinds:
        return 'reactive'
    if None in kinds:
        return None
    return 'surf' if 'surf' in kinds else 'vol'


def classify_rxn_rule(rule, model):
    """
    Determine the RxnType of a rule from the molecule types of its reactants

    The species superclasses (``ALL_MOLECULES`` etc.) are known even when the
    model does not declare them.

    Parameters
    ----------
    rule : RxnRule
    model : Model
        Model holding the molecule types named in the rule's reactants.

    Returns
    -------
    RxnType or None
        None means the rule fits none of the supported classes: it has no
        reactants, more than two, or names an unknown molecule type.
    """
    kinds = [_reactant_kind(r, model) for r in rule.reactants]
    # a reactive surface wins over anything unknown in the other reactants
    if 'reactive' in kinds:
        return RxnType.REACTIVE_SURFACE
    if None in kinds:
        return None

    if len(kinds) == 1:
        return RxnType.UNIMOL
    elif len(kinds) == 2:
        num_surf = kinds.count('surf')
        if num_surf == 0:
            return RxnType.BIMOL_VOL
        elif num_surf == 1:
            return RxnType.BIMOL_VOL_SURF
        else:
            return RxnType.BIMOL_SURF_SURF
    return None


class Model(object):

    """
    A reaction network snapshot: molecule types, compartments and rules.

    The default compartment is created together with the model and always has
    id 0.

    Parameters
    ----------
    name : string, optional
        Name of the model.

    Attributes
    ----------
    elem_mol_types : ComponentSet
        The ElemMolType components of the model.
    compartments : ComponentSet
        The Compartment components of the model.
    rxn_rules : ComponentSet
        The RxnRule components of the model.

    """

    def __init__(self, name=None):
        self.name = name
        self.elem_mol_types = ComponentSet()
        self.compartments = ComponentSet()
        self.rxn_rules = ComponentSet()
        self.add_component(
            Compartment(names.DEFAULT_COMPARTMENT_NAME, dimension=3))

    def __getstate__(self):
        return self.__dict__.copy()

    def __setstate__(self, state):
        self.__dict__.update(state)
        for c in self.all_components():
            c.model = weakref.ref(self)

    def all_components(self):
        # names are only unique within one container, so this is a plain list
        return (list(self.elem_mol_types) + list(self.compartments) +
                list(self.rxn_rules))

    def add_component(self, other):
        """Add a component to the model, returning the component"""
        if isinstance(other, ElemMolType):
            container = self.elem_mol_types
        elif isinstance(other, Compartment):
            container = self.compartments
            if other.parent is not None and other.parent not in container:
                raise ValueError(
                    "Parent %s of compartment %s is not part of the model" %
                    (other.parent.name, other.name))
            if other.size_param_name in names.RESERVED_PARAMETER_NAMES:
                raise ReservedNameError(
                    "Compartment %s would be sized by %s, which is a reserved "
                    "parameter name" % (other.name, other.size_param_name))
        elif isinstance(other, RxnRule):
            container = self.rxn_rules
        else:
            raise Exception("Tried to add component of unknown type '%s' to "
                            "model" % type(other))
        container.add(other)
        other.id = container.index(other)
        other.model = weakref.ref(self)
        if isinstance(other, Compartment) and other.parent is not None:
            other.parent_id = other.parent.id
            other.parent.children_ids.append(other.id)
        return other

    def get_compartment(self, compartment_id):
        return self.compartments[compartment_id]

    def get_elem_mol_type(self, elem_mol_type_id):
        return self.elem_mol_types[elem_mol_type_id]

    @property
    def default_compartment(self):
        return self.compartments[names.DEFAULT_COMPARTMENT_NAME]

    def __repr__(self):
        return ("<%s '%s' (molecule types: %d, compartments: %d, rules: %d) "
                "at 0x%x>" %
                (self.__class__.__name__, self.name,
                 len(self.elem_mol_types), len(self.compartments),
                 len(self.rxn_rules), id(self)))


class ComponentSet(Set, Mapping, Sequence):
    """
    An add-and-read-only container for storing model Components.

    It behaves mostly like an ordered set, but components can also be retrieved
    by name *or* index by using the [] operator (like a combination of a dict
    and a list). Components cannot be removed or replaced. Iteration returns
    the component objects.

    Parameters
    ----------
    iterable : iterable of Components, optional
        Initial contents of the set.

    """

    # The implementation is based on a list instead of a linked list (as
    # OrderedSet is), since we only allow add and retrieve, not delete.

    def __init__(self, iterable=None):
        self._elements = []
        self._map = {}
        self._index_map = {}
        if iterable is not None:
            for value in iterable:
                self.add(value)

    def __iter__(self):
        return iter(self._elements)

    def __contains__(self, c):
        if not isinstance(c, Component):
            raise TypeError("Can only work with Components, got a %s" % type(c))
        return c.name in self._map and self[c.name] is c

    def __len__(self):
        return len(self._elements)

    def add(self, c):
        if c not in self:
            if c.name in self._map:
                raise ComponentDuplicateNameError(
                    "Tried to add a component with a duplicate name: %s"
                    % c.name)
            self._elements.append(c)
            self._map[c.name] = c
            self._index_map[c.name] = len(self._elements) - 1

    def __getitem__(self, key):
        # Must support both Sequence and Mapping behavior. Component names are
        # valid identifiers so they can never be confused with integer ids.
        if isinstance(key, (int, slice)):
            return self._elements[key]
        else:
            return self._map[key]

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError("Model has no component '%s'" % name)

    def __setstate__(self, state):
        self.__dict__ = state

    def __dir__(self):
        return self.keys()

    def get(self, key, default=None):
        if isinstance(key, int):
            raise ValueError("get is undefined for integer arguments, use []"
                             "instead")
        try:
            return self[key]
        except KeyError:
            return default

    def index(self, c):
        if c not in self:
            raise ValueError("%s is not in ComponentSet" % c)
        return self._index_map[c.name]

    def keys(self):
        return [c.name for c in self._elements]

    def values(self):
        return list(self._elements)

    def items(self):
        return [(c.name, c) for c in self._elements]

    def __eq__(self, other):
        return list(self) == list(other)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return '%s([\n %s\n])' % (self.__class__.__name__,
                                   ',\n '.join(repr(c) for c in self))


class InvalidComponentNameError(ValueError):
    """Inappropriate component name."""
    def __init__(self, name):
        ValueError.__init__(self, "Not a valid component name: '%s'" % name)


class ComponentDuplicateNameError(ValueError):
    """A component was added with the same name as an existing one."""
    pass


class DuplicateSiteError(ValueError):
    pass


class UnknownSiteError(ValueError):
    pass


class InvalidComplexPatternError(ValueError):
    """A complex pattern string could not be split into molecules."""
    def __init__(self, pattern):
        ValueError.__init__(self, "Invalid complex pattern: '%s'" % pattern)


class ReservedNameError(ValueError):
    """A component name would produce a reserved BNGL parameter name."""
    pass
