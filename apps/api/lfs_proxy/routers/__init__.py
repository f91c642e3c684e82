from lfs_proxy.routers.lfs_batch import handle_lfs_error, handle_validation_error
from lfs_proxy.routers.lfs_batch import router as lfs_batch_router

__all__ = ["lfs_batch_router", "handle_lfs_error", "handle_validation_error"]
