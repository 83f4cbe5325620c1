"""Domain helpers: bounding boxes, ownership policy and uploaded images."""
