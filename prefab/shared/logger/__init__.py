from prefab.shared.logger.prefab_logger import PrefabLogger

__all__ = ["PrefabLogger"]
