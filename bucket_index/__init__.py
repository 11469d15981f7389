"""Browse an object storage bucket over HTTP."""
