"""Orders service: order lifecycle, ownership checks and listing."""
