"""Editorial portal: sessions, article lifecycle and approval consensus over the newsroom backend."""
