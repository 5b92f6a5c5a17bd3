"""rbiam: correlates Kubernetes workload identities with AWS IAM grants.

Reconstructs the access graph behind a traversal trace and exports it as a
raw record dump or a styled Graphviz document.
"""

__version__ = "0.3.0"
