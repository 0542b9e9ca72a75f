"""Link creation, resolution and health reporting."""
