"""
Ordering of a model's compartment hierarchy for export.

BNGL requires a compartment's parent to be declared before the compartment
itself. The compartments of a model form a forest (see
:py:class:`bngexport.core.Compartment`); :py:func:`order_compartments` walks
it depth-first from each root so that parents always come first.
"""

import networkx as nx


def compartment_graph(model):
    """
    Build the compartment forest of a model as a directed graph

    Nodes are compartment ids, edges point from parent to child. Node and
    successor order follow the order of the model's compartments and of each
    compartment's ``children_ids``.

    Parameters
    ----------
    model : bngexport.core.Model

    Returns
    -------
    networkx.DiGraph
    """
    graph = nx.DiGraph()
    for comp in model.compartments:
        graph.add_node(comp.id, name=comp.name)
    for comp in model.compartments:
        for child_id in comp.children_ids:
            graph.add_edge(comp.id, child_id)
    return graph


def order_compartments(model, graph=None):
    """
    Compartment ids in an order where each parent precedes its children

    Every root (a compartment without a parent) is visited in id order and its
    subtree walked depth-first. An id is never visited twice, so malformed
    cyclic input cannot recurse forever; compartments that cannot be reached
    from a root are left out, which :py:func:`check_compartment_order`
    detects.

    Parameters
    ----------
    model : bngexport.core.Model
    graph : networkx.DiGraph, optional
        The model's :py:func:`compartment_graph`, built if not given.

    Returns
    -------
    list of int
    """
    if graph is None:
        graph = compartment_graph(model)
    order = []
    visited = set()
    for comp in model.compartments:
        if comp.parent_id is None:
            _visit_compartment(graph, comp.id, visited, order)
    return order


def _visit_compartment(graph, comp_id, visited, order):
    if comp_id in visited:
        return
    order.append(comp_id)
    visited.add(comp_id)
    for child_id in graph.successors(comp_id):
        _visit_compartment(graph, child_id, visited, order)


def check_compartment_order(model, order, graph=None):
    """
    Raise CompartmentHierarchyError unless order covers every compartment once

    Parameters
    ----------
    model : bngexport.core.Model
    order : list of int
        Result of :py:func:`order_compartments`.
    graph : networkx.DiGraph, optional
        The model's :py:func:`compartment_graph`, used to describe the fault.
    """
    if len(order) == len(set(order)) == len(model.compartments):
        return
    if graph is None:
        graph = compartment_graph(model)
    ordered = set(order)
    unreachable = [c.id for c in model.compartments if c.id not in ordered]
    msg = 'Compartment hierarchy of model %s is not a forest' % model.name
    if unreachable:
        msg += ', compartments not reachable from a root: %s' % ', '.join(
            model.compartments[i].name for i in unreachable)
        try:
            cycle = nx.find_cycle(graph, unreachable)
        except nx.NetworkXNoCycle:
            pass
        else:
            msg += ' (cycle: %s)' % ' -> '.join(
                model.compartments[u].name for u, _ in cycle)
    raise CompartmentHierarchyError(msg)


class CompartmentHierarchyError(RuntimeError):
    """The compartments of a model do not form a forest"""
    pass
