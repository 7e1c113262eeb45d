"""Dataset/view consistency core and the services around it."""
