class StorefrontError(Exception):
    pass


class PromotionNotFound(StorefrontError):
    pass


class PromotionAlreadyExists(StorefrontError):
    pass


class UserNotFound(StorefrontError):
    pass
