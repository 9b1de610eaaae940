"""Well-known permission and role codes seeded at bootstrap and checked by authorization."""

# Holding this permission grants access to every team regardless of membership.
PERMISSION_ADMIN = "admin"
PERMISSION_DEFAULT = "default"

ROLE_USER = "user"
ROLE_ADMIN = "admin"

# Role code -> permission codes it is seeded with.
SEEDED_ROLE_PERMISSIONS: dict[str, tuple[str, ...]] = {
    ROLE_USER: (PERMISSION_DEFAULT,),
    ROLE_ADMIN: (PERMISSION_DEFAULT, PERMISSION_ADMIN),
}
