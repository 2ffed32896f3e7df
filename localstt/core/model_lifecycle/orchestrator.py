# File: localstt/core/model_lifecycle/orchestrator.py

import gc
import torch
import logging
from threading import Lock
from typing import Callable, Optional, Tuple
from .types import ModelType

logger = logging.getLogger(__name__)

class ModelOrchestrator:
    """
    Singleton Resource Manager.
    Keeps exactly one loaded acoustic model in memory at a time,
    keyed by (model type, checkpoint path).
    """
    _instance = None
    _lock = Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super(ModelOrchestrator, cls).__new__(cls)
                cls._instance._current_key = None
                cls._instance._loaded_model = None
        return cls._instance

    def request_model(self, model_type: ModelType, checkpoint: str, loader_func: Callable[[], object]):
        """
        Request usage of a model. If it's not loaded, unload current and load requested.

        Args:
            model_type: The enum identifier for the model family.
            checkpoint: Path of the checkpoint on disk; part of the cache key.
            loader_func: Returns the loaded model object.
                         Only called if the model needs to be loaded.
        """
        key = (model_type, checkpoint)
        with self._lock:
            # 1. Already loaded? Return immediately.
            if self._current_key == key and self._loaded_model is not None:
                return self._loaded_model

            # 2. Unload different model if exists
            if self._loaded_model is not None:
                self._unload()

            # 3. Load new model
            logger.info(f"Orchestrator: Loading {model_type.value} from {checkpoint}...")
            try:
                self._loaded_model = loader_func()
                self._current_key = key
                return self._loaded_model
            except Exception as e:
                logger.error(f"Failed to load {model_type.value} from {checkpoint}: {e}")
                raise

    def release(self):
        """Drops whatever model is currently held."""
        with self._lock:
            if self._loaded_model is not None:
                self._unload()

    def _unload(self):
        """Forcefully removes the current model from memory."""
        if self._current_key:
            logger.info(f"Orchestrator: Unloading {self._current_key[0].value} ({self._current_key[1]})...")

        self._loaded_model = None
        self._current_key = None

        # Force GC and CUDA clear
        gc.collect()
        if torch.cuda.is_available():
            torch.cuda.empty_cache()

    def get_current_key(self) -> Optional[Tuple[ModelType, str]]:
        """Helper for testing state."""
        return self._current_key
