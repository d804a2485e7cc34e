"""Domain types for food, nutrients, workouts, progress and nutrition statistics."""