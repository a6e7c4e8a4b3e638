"""Concurrent per-project collection"""

from .coordinator import CollectionCoordinator, InventoryAccumulator, ProjectWorker
