#unified content errors
class ContentError(RuntimeError): ...
class NotFoundError(ContentError): ...
class GalleryError(ContentError): ...
class DuplicateError(ContentError): ...
