"""Query parameter normalization shared by the routers."""


def normalize_role_param(role: str) -> str:
    """Capitalize a role query value: "marksman" -> "Marksman"."""
    role = role.strip()
    return role[:1].upper() + role[1:].lower()


def normalize_damage_type_param(damage_type: str) -> str:
    return damage_type.strip().lower()
