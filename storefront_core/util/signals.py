from blinker import Signal

on_order_confirmed = Signal()
on_order_paid = Signal()
