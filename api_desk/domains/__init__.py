"""Domain layer (document models and pure helpers over them).

Nothing here touches the network or the filesystem; the infrastructure layer
reads and writes these models and the services layer wires the two together.
"""
