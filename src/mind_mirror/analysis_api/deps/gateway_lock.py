from typing import Optional
import threading

from mind_mirror.shared.analyser import AnalysisGateway

# Initialize gateway with thread safety
_gateway = None
_gateway_lock = threading.Lock()


def get_gateway() -> Optional[AnalysisGateway]:
    """Thread-safe getter for the gateway instance."""
    with _gateway_lock:
        return _gateway


def set_gateway(new_gateway: Optional[AnalysisGateway]) -> None:
    """Thread-safe setter for the gateway instance."""
    global _gateway
    with _gateway_lock:
        _gateway = new_gateway
