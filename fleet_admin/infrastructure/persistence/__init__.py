from .gateway import PersistGateway, SimulatedPersistGateway

__all__ = ["PersistGateway", "SimulatedPersistGateway"]
