from prefab.shared.probe.capability_probe import CapabilityProbe

__all__ = ["CapabilityProbe"]
