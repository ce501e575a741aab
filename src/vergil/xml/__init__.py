from .nodes import MISSING, Node, XMLLeaf, XMLNode, XMLSection
from .document import XMLFile
