"""edgeflow: edge geometry and the connection gesture of a node-graph surface."""

__version__ = "0.1.0"
