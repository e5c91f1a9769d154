"""HTTP service and command-line surfaces over the resilient client."""
