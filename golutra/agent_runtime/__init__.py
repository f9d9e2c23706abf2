"""Agent adapter interface, lifecycle management and health checking."""