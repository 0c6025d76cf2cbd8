"""Processor base class, the cmdline processor and the context they share."""